"""
평가 도메인 (Evaluation Domain)
================================

**기본 도메인 H**:
  H = {1, ω, ω², ..., ω^(n-1)}, n = 제약 시스템 크기 (2의 거듭제곱).
  셀렉터, 배선, lookup 열은 모두 H 위의 평가값으로 정의된다.

**확장 도메인 (4n)**:
  몫 다항식의 분자는 차수가 약 4n이므로, 4n개의 점에서 평가해야
  다항식을 복원할 수 있다. 또한 H 위에서는 Z_H(x) = 0이라 나눌 수 없으므로
  코셋 k·H_4n = {k, k·ω₄ₙ, k·ω₄ₙ², ...}에서 평가한다.

  ┌────────────────────────────────────────────────────────────┐
  │  ωₙ = ω₄ₙ⁴  이므로                                          │
  │  p(ωₙ · k·ω₄ₙⁱ) = p(k·ω₄ₙ^(i+4))                           │
  │  → 확장 도메인에서 "다음 행"은 인덱스 +1이 아니라 +4이다.     │
  └────────────────────────────────────────────────────────────┘

**설정 오류**:
  확장 크기 4n의 log2가 TWO_ADICITY(28)를 넘으면 도메인을 만들 수 없다.
  EvaluationDomain.new()는 이때 InvalidEvalDomainSize를 던진다.

사용 예시:
    >>> domain = EvaluationDomain.new(4)
    >>> ext = domain.extend()          # 크기 16
    >>> evals = ext.coset_fft(poly.coeffs)
"""

import logging

from plonkup.field import FR, GENERATOR, get_root_of_unity
from plonkup.polynomial import Polynomial, fft, ifft

logger = logging.getLogger(__name__)


# 몫 다항식 평가용 도메인 확장 배수
EXTENSION_FACTOR = 4

# 코셋 이동값 k (H의 원소가 아님)
COSET_SHIFT = GENERATOR


class EvaluationDomain:
    """크기 n(2의 거듭제곱)의 곱셈 부분군 H.

    속성:
        size: n
        log_size: log2(n)
        omega: n차 원시 단위근
        size_inv: 1/n
    """

    def __init__(self, size):
        self.omega = get_root_of_unity(size)
        self.size = size
        self.log_size = size.bit_length() - 1
        self.size_inv = FR(1) / FR(size)

    @classmethod
    def new(cls, size):
        """도메인을 만든다.

        Raises:
            InvalidEvalDomainSize: size가 2의 거듭제곱이 아니거나 2^28을 넘을 때
        """
        domain = cls(size)
        logger.debug("평가 도메인 생성: size=%d, log_size=%d", size, domain.log_size)
        return domain

    def extend(self, factor=EXTENSION_FACTOR):
        """크기 factor·n의 확장 도메인을 만든다 (설정 오류가 날 수 있는 유일한 지점)."""
        return EvaluationDomain.new(factor * self.size)

    def __len__(self):
        return self.size

    def __eq__(self, other):
        if not isinstance(other, EvaluationDomain):
            return NotImplemented
        return self.size == other.size

    def __repr__(self):
        return f"EvaluationDomain(size={self.size})"

    def element(self, i):
        """ωⁱ"""
        return self.omega ** (i % self.size)

    def elements(self):
        """[1, ω, ..., ω^(n-1)]을 순서대로 생성한다."""
        current = FR(1)
        for _ in range(self.size):
            yield current
            current = current * self.omega

    # ── 변환 ──

    def _pad(self, coeffs):
        if len(coeffs) > self.size:
            raise ValueError(
                f"계수 {len(coeffs)}개는 크기 {self.size} 도메인에 들어가지 않습니다"
            )
        return list(coeffs) + [FR(0)] * (self.size - len(coeffs))

    def fft(self, coeffs):
        return fft(self._pad(coeffs), self.omega)

    def ifft(self, evals):
        return ifft(self._pad(evals), self.omega)

    def coset_fft(self, coeffs, shift=COSET_SHIFT):
        """다항식을 코셋 shift·H에서 평가한다: cᵢ → shiftⁱ·cᵢ 후 FFT."""
        shifted = Polynomial(self._pad(coeffs)).shift(shift).coeffs
        return self.fft(shifted)

    def coset_ifft(self, evals, shift=COSET_SHIFT):
        """coset_fft의 역변환."""
        coeffs = self.ifft(evals)
        return Polynomial(coeffs).shift(FR(1) / shift).coeffs

    def interpolate(self, evals):
        """H 위의 평가값을 보간한 Polynomial."""
        return Polynomial(self.ifft(evals))

    # ── 닫힌 형태 평가 ──

    def evaluate_vanishing(self, point):
        """Z_H(x) = x^n - 1"""
        return point ** self.size - FR(1)

    def evaluate_first_lagrange(self, point):
        """L₁(x) = (x^n - 1) / (n·(x - 1)). x ∈ H이면 크로네커 델타."""
        if point == FR(1):
            return FR(1)
        zh = self.evaluate_vanishing(point)
        if zh == FR(0):
            return FR(0)
        return zh * self.size_inv / (point - FR(1))


class Evaluations:
    """(평가값, 도메인) 쌍.

    셀렉터를 계수 형태(선형화용)와 평가 형태(몫 계산용)로 모두 보관할 때
    평가 형태 쪽이다.
    """

    def __init__(self, evals, domain):
        self.evals = [e if isinstance(e, FR) else FR(e) for e in evals]
        self.domain = domain

    def __getitem__(self, index):
        return self.evals[index]

    def __len__(self):
        return len(self.evals)

    def __iter__(self):
        return iter(self.evals)

    def __eq__(self, other):
        if not isinstance(other, Evaluations):
            return NotImplemented
        return self.evals == other.evals and self.domain == other.domain

    def interpolate(self):
        return self.domain.interpolate(self.evals)


def coset_evaluations(poly, domain):
    """다항식을 domain의 확장 코셋에서 평가한 Evaluations."""
    extended = domain.extend()
    return Evaluations(extended.coset_fft(poly.coeffs), extended)


def first_lagrange_coset_evals(domain):
    """L₁(x)을 확장 코셋 k·H_4n 위에서 평가한다.

    코셋 점은 H에 속하지 않으므로 닫힌 형태를 바로 쓸 수 있다.
    """
    extended = domain.extend()
    return [
        domain.evaluate_first_lagrange(COSET_SHIFT * x)
        for x in extended.elements()
    ]
