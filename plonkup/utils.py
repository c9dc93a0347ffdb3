"""
Plonkup 공유 유틸리티
=====================

**lc (linear combination)**:
  lc([v₀, v₁, ..., v_k], χ) = v₀ + χ·v₁ + χ²·v₂ + ... + χ^k·v_k

**compress (행 압축)**:
  4개 배선 값 한 행 (w₀, w₁, w₂, w₃)을 하나의 필드 원소로 묶는다.
    compress(w₀, w₁, w₂, w₃, ζ) = w₀ + ζ·w₁ + ζ²·w₂ + ζ³·w₃
  lookup 질의 값 f와 단일 열로 비교할 수 있게 되며,
  테이블의 네 열도 같은 ζ로 압축해 t를 만든다.

  ζ = 0이면 compress(...) = w₀ (첫 열만 남음).
"""

from plonkup.field import FR


def lc(values, challenge):
    """임의 길이의 랜덤 선형 결합 (Horner, 높은 차수가 뒤쪽)."""
    if not isinstance(challenge, FR):
        challenge = FR(challenge)
    result = FR(0)
    for value in reversed(values):
        result = result * challenge + value
    return result


def compress(w_l, w_r, w_o, w_4, zeta):
    """한 행의 4개 값을 ζ의 거듭제곱으로 압축한다."""
    return lc([w_l, w_r, w_o, w_4], zeta)


def is_power_of_2(n):
    return n > 0 and (n & (n - 1)) == 0


def next_power_of_2(n):
    """n 이상의 가장 작은 2의 거듭제곱.

    예시:
        >>> next_power_of_2(3)  # 4
        >>> next_power_of_2(4)  # 4
    """
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()
