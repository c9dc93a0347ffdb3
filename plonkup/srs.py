"""
Structured Reference String (SRS)
==================================

KZG 예제 커밋먼트 스킴이 쓰는 G1 거듭제곱 [G1, τ·G1, ..., τ^d·G1].

위젯 자체는 스킴에 독립적이며 커밋먼트를 복사만 한다. 이 모듈은
테스트와 예제에서 실제 커밋먼트를 만들어 선형화/커밋먼트 일치를
확인하기 위한 것이다. seed가 주어지면 τ를 결정론적으로 만든다 (교육용).

사용 예시:
    >>> srs = SRS.generate(max_degree=16, seed=42)
    >>> len(srs.g1_powers)  # 17
"""

import hashlib
import secrets

from plonkup.field import FR, G1, ec_mul, CURVE_ORDER


class SRS:
    """KZG 커밋먼트용 공개 파라미터.

    속성:
        g1_powers: [G1, τ·G1, τ²·G1, ..., τ^d·G1]
        max_degree: 커밋할 수 있는 최대 다항식 차수 d
    """

    def __init__(self, g1_powers, max_degree):
        self.g1_powers = g1_powers
        self.max_degree = max_degree

    @classmethod
    def generate(cls, max_degree, seed=None):
        """SRS를 생성한다.

        Args:
            max_degree: 최대 차수. lookup 위젯 테스트(n=4)는 선형화 다항식이
                        n-1차이므로 작은 값으로 충분하다.
            seed: 결정론적 τ 생성용 시드. None이면 무작위.
        """
        if seed is not None:
            h = hashlib.sha256(str(seed).encode()).digest()
            tau = FR(int.from_bytes(h, "big") % CURVE_ORDER)
        else:
            tau = FR(secrets.randbelow(CURVE_ORDER - 1) + 1)

        g1_powers = []
        tau_power = FR(1)
        for _ in range(max_degree + 1):
            g1_powers.append(ec_mul(G1, tau_power))
            tau_power = tau_power * tau
        return cls(g1_powers, max_degree)
