"""
Plookup 커밋 단계: 질의 열 f, 정렬 목록 h1/h2, 누적자 z2
=========================================================

위젯(widget/lookup.py)은 이 값들을 읽기만 한다. 여기의 함수들은
증명마다 한 번, 단일 스레드로, 병렬 몫 계산이 시작되기 전에 실행된다.

**질의 열 f**:
  q_lookup = 1 인 행: f = compress(a, b, c, d, ζ)
  q_lookup = 0 인 행: 테이블 첫 행의 압축값 (어떤 테이블 값이든 무방)

**정렬 목록**:
  s = sort(f ∪ t) (t의 행 순서 기준), h1 = s[0::2], h2 = s[1::2]

**누적자 z2 (Grand Product)**:
  z2(ω⁰) = 1
  z2(ωⁱ⁺¹) = z2(ωⁱ) ·
        (1+δ)·(ε + fᵢ)·(ε(1+δ) + tᵢ + δ·tᵢ₊₁)
      ──────────────────────────────────────────────────────────────
      (ε(1+δ) + h1ᵢ + δ·h2ᵢ)·(ε(1+δ) + h2ᵢ + δ·h1ᵢ₊₁)

  인덱스는 순환(mod n)이다. f ⊆ t이면 분자·분모 전체 곱이 같아서
  z2(ω^n) = z2(ω⁰) = 1로 닫힌다.
"""

from plonkup.errors import NotInTableError
from plonkup.field import FR
from plonkup.lookup.multiset import MultiSet
from plonkup.utils import compress


def compute_query_column(q_lookup, w_l, w_r, w_o, w_4, table_columns, zeta):
    """행별로 압축한 질의 열 f를 만든다.

    Args:
        q_lookup: 기본 도메인 위의 lookup 셀렉터 값 리스트
        w_l, w_r, w_o, w_4: 배선 값 리스트 (같은 길이)
        table_columns: 테이블의 네 열 MultiSet
        zeta: 압축 챌린지

    Returns:
        MultiSet: f
    """
    filler = compress(*(column[0] for column in table_columns), zeta)
    f = MultiSet()
    for q, a, b, c, d in zip(q_lookup, w_l, w_r, w_o, w_4):
        if q == FR(0):
            f.push(filler)
        else:
            f.push(compress(a, b, c, d, zeta))
    return f


def sorted_lists(f, t):
    """f ∪ t를 정렬해 교대 분할한 (h1, h2).

    질의 값이 테이블에 없으면 증명은 어차피 검증에 실패하지만,
    그 사실을 증명 생성 전에 바로 알린다.

    Raises:
        NotInTableError: f에 t에 없는 값이 있을 때
        ValueError: f와 t의 길이가 다를 때
    """
    if len(f) != len(t):
        raise ValueError(f"f({len(f)})와 t({len(t)})의 길이가 다릅니다")
    if not f.is_subset_of(t):
        support = set(int(v) for v in t)
        missing = next(v for v in f if int(v) not in support)
        raise NotInTableError(missing)
    return f.sorted_concat(t).halve_alternating()


def compute_lookup_accumulator(f, t, h1, h2, delta, epsilon):
    """z2의 기본 도메인 평가값 [z2(ω⁰), ..., z2(ω^(n-1))]을 계산한다."""
    n = len(f)
    one_plus_delta = FR(1) + delta
    epsilon_one_plus_delta = epsilon * one_plus_delta

    z2 = [FR(1)]
    for i in range(n - 1):
        num = (
            one_plus_delta
            * (epsilon + f[i])
            * (epsilon_one_plus_delta + t[i] + delta * t[(i + 1) % n])
        )
        den = (
            (epsilon_one_plus_delta + h1[i] + delta * h2[i])
            * (epsilon_one_plus_delta + h2[i] + delta * h1[(i + 1) % n])
        )
        z2.append(z2[-1] * num / den)
    return z2
