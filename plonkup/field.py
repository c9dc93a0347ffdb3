"""
Plonkup 기반 모듈: 유한체(Finite Field) 및 G1 연산
=====================================================

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드. 위젯의 모든 몫 항, 선형화 계수,
  커밋먼트 스칼라는 이 필드 위에서 계산된다.
  - 위수 p ≈ 2^254
  - p - 1 = 2^28 × m (m은 홀수) → TWO_ADICITY = 28
  - 확장 도메인 4n도 2^28을 넘을 수 없다 (넘으면 설정 오류)

**G1 연산**:
  위젯은 커밋먼트를 불투명한 값으로만 다룬다. 여기의 G1 연산은
  테스트와 KZG 예제 스킴(kzg.py)에서 다중 스칼라 곱을 계산할 때 쓰인다.

사용 예시:
    >>> from plonkup.field import FR, G1, ec_mul
    >>> FR(3) * FR(7)       # FR(21)
    >>> ec_mul(G1, 5)       # 5·G1
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128

from plonkup.errors import InvalidEvalDomainSize


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ를 상속하여 +, -, *, /, ** 연산을 제공한다.

    주의:
        FQ는 해시 가능성을 보장하지 않으므로 dict/set 키로 쓸 때는
        int(x)를 사용한다.
    """
    field_modulus = bn128.curve_order


# 곡선 위수 (필드 크기)
CURVE_ORDER = bn128.curve_order

# p - 1 = 2^28 × m
TWO_ADICITY = 28

# FR*의 생성자. 단위근 유도와 코셋 이동(shift)에 모두 사용한다.
GENERATOR = FR(5)


# ─────────────────────────────────────────────────────────────────────
# G1 연산
# ─────────────────────────────────────────────────────────────────────

G1 = bn128.G1

# 영점 (point at infinity)
Z1 = None


def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point."""
    if isinstance(scalar, FR):
        scalar = int(scalar)
    return bn128.multiply(point, scalar % CURVE_ORDER)


def ec_add(p1, p2):
    """타원곡선 점 덧셈: p1 + p2."""
    return bn128.add(p1, p2)


def ec_neg(point):
    """타원곡선 점의 역원: -point."""
    return bn128.neg(point)


# ─────────────────────────────────────────────────────────────────────
# 단위근 (Roots of Unity)
# ─────────────────────────────────────────────────────────────────────

def get_root_of_unity(n):
    """n차 원시 단위근 ω를 반환한다.

    ω = g^((p-1)/n), g = GENERATOR.

    Args:
        n: 단위근의 차수 (2의 거듭제곱, ≤ 2^TWO_ADICITY)

    Returns:
        FR: n차 원시 단위근

    Raises:
        InvalidEvalDomainSize: n이 2의 거듭제곱이 아니거나 2^28을 초과할 때
    """
    if n < 1 or (n & (n - 1)) != 0:
        raise InvalidEvalDomainSize(None, TWO_ADICITY)
    log_n = n.bit_length() - 1
    if log_n > TWO_ADICITY:
        raise InvalidEvalDomainSize(log_n, TWO_ADICITY)
    if n == 1:
        return FR(1)
    return GENERATOR ** ((CURVE_ORDER - 1) // n)
