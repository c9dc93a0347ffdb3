"""
Plonkup 오류 타입
==================

이 계층에서 발생할 수 있는 오류는 두 종류뿐이다.

**설정 오류 (configuration error)**:
  확장 평가 도메인(4n)을 필드의 2-adicity 안에서 만들 수 없는 경우.
  증명별 연산이 시작되기 전에 즉시 호출자에게 전달되며, 재시도하지 않는다.

**건전성 전제 위반 (soundness precondition)**:
  lookup 질의 멀티셋이 테이블의 부분 멀티셋이 아닌 경우.
  커밋 단계(h1, h2 구성)에서만 검사한다. 위젯의 점별 계산은 절대 예외를
  던지지 않고, 잘못된 값은 0이 아닌 몫 항으로 드러난다.
"""


class InvalidEvalDomainSize(ValueError):
    """요청한 크기의 평가 도메인을 만들 수 없다.

    속성:
        log_size_of_group: 요청한 도메인 크기의 log2 (2의 거듭제곱이 아니면 None)
        adicity: 필드가 지원하는 최대 log2 크기 (two-adicity)
    """

    def __init__(self, log_size_of_group, adicity):
        self.log_size_of_group = log_size_of_group
        self.adicity = adicity
        super().__init__(
            f"평가 도메인을 만들 수 없습니다: log_size_of_group={log_size_of_group}, "
            f"adicity={adicity}"
        )


class NotInTableError(ValueError):
    """lookup 질의 값(또는 행)이 테이블에 없다 (부분 멀티셋 조건 위반).

    속성:
        value: 찾지 못한 FR 값, 또는 행 조회라면 (a, b, c) 튜플
    """

    def __init__(self, value):
        self.value = value
        if isinstance(value, tuple):
            shown = tuple(int(v) for v in value)
            super().__init__(f"lookup 테이블에 없는 행입니다: {shown}")
        else:
            super().__init__(f"lookup 테이블에 없는 값입니다: {int(value)}")
