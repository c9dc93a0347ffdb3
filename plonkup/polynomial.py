"""
Plonkup 기반 모듈: 계수 표현 다항식과 NTT
============================================

**Polynomial**:
  p(x) = c₀ + c₁·x + c₂·x² + ... 의 계수 표현.
  위젯의 선형화 단계는 "열린(open)" 다항식 q_lookup(x), z2(x), h1(x)에
  ζ에서 평가한 스칼라를 곱해 더하므로, 스칼라곱과 덧셈이 핵심 연산이다.

**fft / ifft**:
  재귀 Cooley-Tukey radix-2 NTT. 도메인과 코셋 평가는 domain.py가
  이 함수들 위에 구현한다.

**poly_div**:
  긴 나눗셈. 몫 다항식 검증(테스트)에서 Z_H(x)로 나누는 데 쓴다.

사용 예시:
    >>> p = Polynomial([FR(1), FR(2), FR(3)])  # 1 + 2x + 3x²
    >>> p.evaluate(FR(2))                      # FR(17)
"""

from plonkup.field import FR


def _to_fr(value):
    return value if isinstance(value, FR) else FR(value)


class Polynomial:
    """유한체 FR 위의 다항식 (계수 표현).

    coeffs = [c₀, c₁, c₂, ...], 최고차 0 계수는 항상 잘라낸다.
    영 다항식은 [FR(0)]로 표현한다.
    """

    def __init__(self, coeffs=None):
        if not coeffs:
            self.coeffs = [FR(0)]
        else:
            self.coeffs = [_to_fr(c) for c in coeffs]
        self._trim()

    def _trim(self):
        while len(self.coeffs) > 1 and self.coeffs[-1] == FR(0):
            self.coeffs.pop()

    @property
    def degree(self):
        """다항식의 차수. 영 다항식의 차수는 0으로 정의한다."""
        return len(self.coeffs) - 1

    def is_zero(self):
        return len(self.coeffs) == 1 and self.coeffs[0] == FR(0)

    def evaluate(self, point):
        """Horner 방식으로 p(point)를 계산한다."""
        point = _to_fr(point)
        result = FR(0)
        for coeff in reversed(self.coeffs):
            result = result * point + coeff
        return result

    def shift(self, factor):
        """p(factor·x)의 계수를 반환한다.

        cᵢ → factorⁱ · cᵢ. factor = ω이면 "다음 행" 다항식 p(ωx)가 된다.
        """
        factor = _to_fr(factor)
        out = []
        power = FR(1)
        for coeff in self.coeffs:
            out.append(coeff * power)
            power = power * factor
        return Polynomial(out)

    def _combine(self, other, op):
        if isinstance(other, (int, FR)):
            other = Polynomial([other])
        size = max(len(self.coeffs), len(other.coeffs))
        zero = FR(0)
        return Polynomial([
            op(
                self.coeffs[i] if i < len(self.coeffs) else zero,
                other.coeffs[i] if i < len(other.coeffs) else zero,
            )
            for i in range(size)
        ])

    def __add__(self, other):
        return self._combine(other, lambda a, b: a + b)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        return self._combine(other, lambda a, b: a - b)

    def __rsub__(self, other):
        return Polynomial([other]).__sub__(self)

    def __neg__(self):
        return Polynomial([-c for c in self.coeffs])

    def __mul__(self, other):
        """스칼라곱 또는 O(n²) 다항식 곱셈."""
        if isinstance(other, (int, FR)):
            other = _to_fr(other)
            return Polynomial([c * other for c in self.coeffs])
        result = [FR(0)] * (len(self.coeffs) + len(other.coeffs) - 1)
        for i, a in enumerate(self.coeffs):
            if a == FR(0):
                continue
            for j, b in enumerate(other.coeffs):
                result[i + j] = result[i + j] + a * b
        return Polynomial(result)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __eq__(self, other):
        if isinstance(other, (int, FR)):
            other = Polynomial([other])
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.coeffs == other.coeffs

    def __len__(self):
        return len(self.coeffs)

    def __repr__(self):
        terms = []
        for i, c in enumerate(self.coeffs):
            if c == FR(0):
                continue
            if i == 0:
                terms.append(str(int(c)))
            elif i == 1:
                terms.append(f"{int(c)}*x")
            else:
                terms.append(f"{int(c)}*x^{i}")
        return "Poly(" + " + ".join(terms) + ")" if terms else "Poly(0)"

    def scale(self, scalar):
        return self * scalar

    @classmethod
    def zero(cls):
        return cls([FR(0)])

    @classmethod
    def vanishing(cls, n):
        """소거 다항식 Z_H(x) = x^n - 1."""
        coeffs = [FR(0)] * (n + 1)
        coeffs[0] = FR(-1)
        coeffs[n] = FR(1)
        return cls(coeffs)

    @classmethod
    def from_evaluations(cls, evals, omega):
        """도메인 {1, ω, ..., ω^(n-1)} 위의 평가값을 보간한다 (IFFT)."""
        return cls(ifft(evals, omega))


# ─────────────────────────────────────────────────────────────────────
# FFT / IFFT (Number Theoretic Transform)
# ─────────────────────────────────────────────────────────────────────

def fft(coeffs, omega):
    """계수 → 평가값 [p(1), p(ω), ..., p(ω^{n-1})].

    재귀 Cooley-Tukey. len(coeffs)는 2의 거듭제곱이어야 한다.
    """
    n = len(coeffs)
    if n == 1:
        return [_to_fr(coeffs[0])]

    omega_sq = omega * omega
    even_vals = fft(coeffs[0::2], omega_sq)
    odd_vals = fft(coeffs[1::2], omega_sq)

    # 버터플라이
    result = [FR(0)] * n
    omega_k = FR(1)
    half = n // 2
    for k in range(half):
        t = omega_k * odd_vals[k]
        result[k] = even_vals[k] + t
        result[k + half] = even_vals[k] - t
        omega_k = omega_k * omega
    return result


def ifft(evals, omega):
    """평가값 → 계수. ω^{-1}로 FFT 후 1/n을 곱한다."""
    n = len(evals)
    coeffs = fft(evals, FR(1) / omega)
    n_inv = FR(1) / FR(n)
    return [c * n_inv for c in coeffs]


# ─────────────────────────────────────────────────────────────────────
# 다항식 나눗셈
# ─────────────────────────────────────────────────────────────────────

def poly_div(a, b):
    """a(x) = b(x)·q(x) + r(x)의 (q, r)을 반환한다.

    Raises:
        ValueError: 제수가 영 다항식인 경우
    """
    if b.is_zero():
        raise ValueError("0으로 나눌 수 없습니다")

    remainder = list(a.coeffs)
    divisor = b.coeffs
    deg_b = len(divisor) - 1
    deg_a = len(remainder) - 1
    if deg_a < deg_b:
        return Polynomial.zero(), Polynomial(remainder)

    quotient = [FR(0)] * (deg_a - deg_b + 1)
    lead_inv = FR(1) / divisor[-1]
    for i in range(deg_a - deg_b, -1, -1):
        coeff = remainder[i + deg_b] * lead_inv
        quotient[i] = coeff
        for j in range(deg_b + 1):
            remainder[i + j] = remainder[i + j] - coeff * divisor[j]

    return Polynomial(quotient), Polynomial(remainder)
