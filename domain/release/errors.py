"""
릴리스 과정 예외
"""


class ReleaseError(Exception):
    """외부 명령(cargo publish, git commit 등)이 실패한 경우"""
