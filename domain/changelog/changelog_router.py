"""
# Changelog API

사람이 편집한 changelog와 커밋 히스토리로 생성한 changelog를 다루는 API입니다.

## 주요 기능
- **파싱**: 마크다운 changelog의 구조(머리말, 릴리스, 세그먼트) 조회
- **생성**: 릴리스 구간의 커밋 목록으로 생성된 릴리스 마크다운 미리보기
- **병합**: 기존 changelog에 생성된 릴리스를 비파괴적으로 병합

## 병합 규칙
1. 같은 버전의 릴리스는 날짜와 생성 세그먼트만 갱신
2. 사람이 지운 생성 세그먼트는 되살리지 않음
3. 새 릴리스는 가장 가까운 버전 옆에 첫 릴리스와 같은 헤딩 스타일로 삽입
"""
from fastapi import APIRouter, HTTPException

from app.logging_config import get_logger, log_error

from .changelog_service import ChangelogService, get_changelog_service
from .errors import ContractViolation
from .generate import DEFAULT_PROLOGUE, generate_changelog
from .parse import parse_changelog
from .schema import (
    ChangeLogFileResponse,
    ChangeLogResponse,
    GenerateRequest,
    GenerateResponse,
    MergeRequest,
    MergeResponse,
    ParseRequest,
)
from .segment import Selection
from .write import MarkdownWriter

logger = get_logger("changelog_router")
router = APIRouter(
    prefix="/changelog",
    tags=["Changelog"],
    responses={
        500: {"description": "Generated changelog violated its invariants"},
    }
)


def _selection(value) -> Selection:
    if value is None:
        return Selection.all()
    try:
        return Selection.parse(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get(
    "",
    response_model=ChangeLogFileResponse,
    summary="설정된 changelog 파일 조회",
    description="CHANGELOG_PATH의 파일을 읽어 구조와 원문을 반환합니다. 파일이 없으면 빈 문서입니다.",
)
async def get_changelog_file():
    service = get_changelog_service()
    text = service.read_text()
    return ChangeLogFileResponse(
        path=str(service.path),
        markdown=text,
        changelog=ChangeLogResponse.from_changelog(service.load()),
    )


@router.post(
    "/parse",
    response_model=ChangeLogResponse,
    summary="Changelog 구조 조회",
    description="마크다운 changelog를 파싱하여 섹션과 세그먼트 구조를 반환합니다. 파싱은 실패하지 않습니다.",
)
async def parse_markdown(request: ParseRequest):
    changelog = parse_changelog(request.markdown)
    logger.info(f"Changelog parsed: {len(changelog.sections)} sections")
    return ChangeLogResponse.from_changelog(changelog)


@router.post(
    "/generate",
    response_model=GenerateResponse,
    summary="릴리스 생성 미리보기",
    description="릴리스 구간의 커밋 목록으로 생성된 릴리스 섹션을 마크다운으로 렌더링합니다.",
)
async def generate_release_markdown(request: GenerateRequest):
    selection = _selection(request.selection)
    try:
        window = request.release.to_window()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    generated = generate_changelog([window], selection=selection, prologue=None)
    writer = MarkdownWriter(selection=selection, repository_url=request.repository_url)
    return GenerateResponse(markdown=writer.write(generated))


@router.post(
    "/merge",
    response_model=MergeResponse,
    summary="Changelog 병합",
    description="""
    기존 마크다운 changelog에 생성된 릴리스들을 병합합니다.
    사람이 작성한 내용(User 세그먼트, 머리말, 알 수 없는 내용)은 그대로 보존됩니다.
    """,
)
async def merge_changelog(request: MergeRequest):
    """
    ## Changelog 병합

    ### 처리 과정
    1. 기존 마크다운 파싱
    2. 릴리스 구간으로 생성된 changelog 구성
    3. 병합 후 마크다운 렌더링

    ### 에러 처리
    - 400: 잘못된 버전 문자열 또는 세그먼트 선택
    - 500: 생성된 changelog가 불변식을 위반 (생성기 버그)
    """
    selection = _selection(request.selection)
    try:
        windows = [release.to_window() for release in request.releases]
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    generated = generate_changelog(
        windows,
        selection=selection,
        prologue=DEFAULT_PROLOGUE if request.include_prologue else None,
    )
    service = ChangelogService(selection=selection, repository_url=request.repository_url)
    try:
        result = service.merge_text(request.markdown, generated)
    except ContractViolation as e:
        log_error(e, {"endpoint": "merge"})
        raise HTTPException(status_code=500, detail=str(e))

    logger.info("Changelog merged", extra={"releases": len(windows), "changed": result["changed"]})
    return MergeResponse(
        markdown=result["markdown"],
        changed=result["changed"],
        changelog=ChangeLogResponse.from_changelog(result["changelog"]),
    )
