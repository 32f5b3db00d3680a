"""
Changelog 예외 정의

파싱은 내용 때문에 실패하지 않습니다. 여기의 예외는 호출자 오용이나 생성기 버그를 나타냅니다.
"""


class ChangelogError(Exception):
    """changelog 처리 중 발생하는 오류의 베이스"""


class ContractViolation(ChangelogError):
    """
    생성된(generated) changelog가 불변식을 위반함 - 업스트림 생성기 버그

    사용자 입력 오류가 아니므로 절대 보정하지 않고 즉시 실패시킵니다.
    """
