"""
위젯 입력 컨테이너
===================

외부 오케스트레이터가 위젯에 넘기는 값들을 이름 붙은 필드로 묶는다.
위젯은 이 값들을 읽기만 하며, 절대 수정하지 않는다.

  ┌──────────────────────────────────────────────────────────────┐
  │  Challenges           δ, ε, ζ, lookup_sep, curve_add_sep      │
  │                       (Fiat-Shamir로 외부에서 유도)             │
  ├──────────────────────────────────────────────────────────────┤
  │  QuotientEvaluations  확장 코셋 위의 평가 테이블               │
  │                       w_l, w_r, w_o, w_4, f, table, h1, h2,   │
  │                       z2, l1  → 몫 항 (점별)                   │
  ├──────────────────────────────────────────────────────────────┤
  │  ProofEvaluations     챌린지 점 z 하나에서의 평가값            │
  │                       a_eval, ..., z2_next_eval → 선형화       │
  ├──────────────────────────────────────────────────────────────┤
  │  OpenPolynomials      선형화에서 평가하지 않고 남겨 두는 다항식 │
  │  OpenCommitments      그 다항식들의 커밋먼트 (검증자 측)        │
  └──────────────────────────────────────────────────────────────┘
"""

from plonkup.domain import EXTENSION_FACTOR


class Challenges:
    """외부에서 유도된 챌린지 스칼라 묶음.

    속성:
        delta, epsilon: Plookup 정렬-차분 항등식의 랜덤 값 (δ, ε)
        zeta: 행 압축 챌린지 (ζ)
        lookup_sep: lookup 항 분리 챌린지 (α)
        curve_add_sep: 곡선 덧셈 게이트 분리 챌린지
    """

    def __init__(self, delta=None, epsilon=None, zeta=None, lookup_sep=None,
                 curve_add_sep=None):
        self.delta = delta
        self.epsilon = epsilon
        self.zeta = zeta
        self.lookup_sep = lookup_sep
        self.curve_add_sep = curve_add_sep


class ProofEvaluations:
    """챌린지 점 z에서의 평가값 (증명에 포함되는 평면 구조).

    배선:
        a_eval, b_eval, c_eval, d_eval: w_l(z), w_r(z), w_o(z), w_4(z)
        a_next_eval, b_next_eval, d_next_eval: 같은 배선의 z·ω 평가값

    lookup:
        q_lookup_eval: q_lookup(z)
        f_eval: f(z)
        table_eval, table_next_eval: t(z), t(z·ω)
        h1_eval, h1_next_eval: h1(z), h1(z·ω)
        h2_eval: h2(z)
        z2_next_eval: z2(z·ω)
    """

    FIELDS = (
        "a_eval", "b_eval", "c_eval", "d_eval",
        "a_next_eval", "b_next_eval", "d_next_eval",
        "q_lookup_eval", "f_eval", "table_eval", "table_next_eval",
        "h1_eval", "h1_next_eval", "h2_eval", "z2_next_eval",
    )

    def __init__(self, **kwargs):
        unknown = set(kwargs) - set(self.FIELDS)
        if unknown:
            raise TypeError(f"알 수 없는 평가값 필드: {sorted(unknown)}")
        for name in self.FIELDS:
            setattr(self, name, kwargs.get(name))


class QuotientEvaluations:
    """몫 항 계산용 평가 테이블.

    모든 열은 같은 길이(확장 도메인 크기)이며 인덱스로 접근한다.
    "다음 행" 값은 shift만큼 떨어진 인덱스에서 순환적으로 읽는다.
    확장 도메인에서는 shift = EXTENSION_FACTOR(4), 기본 도메인에서 직접
    행을 검사할 때는 shift = 1이다.
    """

    COLUMNS = ("w_l", "w_r", "w_o", "w_4", "f", "table", "h1", "h2", "z2", "l1")

    def __init__(self, w_l=None, w_r=None, w_o=None, w_4=None, f=None,
                 table=None, h1=None, h2=None, z2=None, l1=None,
                 shift=EXTENSION_FACTOR):
        self.w_l = w_l
        self.w_r = w_r
        self.w_o = w_o
        self.w_4 = w_4
        self.f = f
        self.table = table
        self.h1 = h1
        self.h2 = h2
        self.z2 = z2
        self.l1 = l1
        self.shift = shift

    def __len__(self):
        return len(self.w_l)

    def next(self, column, index):
        """column의 "다음 행" 값: column[(index + shift) mod size]."""
        values = getattr(self, column)
        return values[(index + self.shift) % len(values)]


class OpenPolynomials:
    """선형화에서 다항식 그대로 남는 증명별 다항식."""

    def __init__(self, z2_poly=None, h1_poly=None):
        self.z2_poly = z2_poly
        self.h1_poly = h1_poly


class OpenCommitments:
    """OpenPolynomials에 대응하는 커밋먼트."""

    def __init__(self, z2_comm=None, h1_comm=None):
        self.z2_comm = z2_comm
        self.h1_comm = h1_comm
