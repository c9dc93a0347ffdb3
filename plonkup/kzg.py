"""
KZG 커밋먼트 (예제 스킴)
=========================

위젯 검증 키는 커밋먼트를 "불투명한 값"으로만 다룬다: 복사하고,
비교하고, (scalars, points) 목록에 덧붙일 뿐이다. 따라서 어떤
커밋먼트 스킴이든 아래 두 가지만 제공하면 된다.

  - commit(poly) → Commitment   (동등 비교 가능, 직렬화 가능)
  - multiscalar_mul(scalars, points) → Commitment  (검증자 측 일괄 검사)

여기서는 bn128 G1 위의 KZG를 제공한다.
  commit(p) = Σ cᵢ · [τⁱ]₁ = p(τ)·G1
KZG는 선형이므로 Σ sₖ·commit(pₖ) = commit(Σ sₖ·pₖ) 가 성립하고,
이것이 선형화 다항식과 커밋먼트 기여분의 일치를 확인하는 근거가 된다.
"""

from plonkup.field import FR, Z1, ec_mul, ec_add


def commit(poly, srs):
    """다항식을 KZG 커밋한다: C = p(τ)·G1.

    Raises:
        ValueError: 다항식 차수가 SRS 최대 차수를 초과할 때
    """
    if poly.degree > srs.max_degree:
        raise ValueError(
            f"다항식 차수 {poly.degree}가 SRS 최대 차수 {srs.max_degree}를 초과합니다"
        )

    result = Z1
    for i, coeff in enumerate(poly.coeffs):
        if coeff == FR(0):
            continue
        result = ec_add(result, ec_mul(srs.g1_powers[i], coeff))
    return result


def multiscalar_mul(scalars, points):
    """Σ sₖ · Pₖ (단순 구현).

    Raises:
        ValueError: 두 목록의 길이가 다를 때
    """
    if len(scalars) != len(points):
        raise ValueError(
            f"scalars({len(scalars)})와 points({len(points)})의 길이가 다릅니다"
        )
    result = Z1
    for scalar, point in zip(scalars, points):
        if point is Z1:
            continue
        result = ec_add(result, ec_mul(point, scalar))
    return result


class KZG10:
    """SRS를 묶은 커밋먼트 스킴 객체.

    예시:
        >>> scheme = KZG10(SRS.generate(8, seed=1))
        >>> c = scheme.commit(Polynomial([1, 2, 3]))
    """

    def __init__(self, srs):
        self.srs = srs

    def commit(self, poly):
        return commit(poly, self.srs)

    def multiscalar_mul(self, scalars, points):
        return multiscalar_mul(scalars, points)
