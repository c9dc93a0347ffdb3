"""
게이트 위젯 계약 (Gate Widget Contract)
========================================

모든 커스텀 게이트는 같은 모양의 연산을 제공한다. 대수는 게이트마다
다르지만, 오케스트레이터는 위젯의 종류를 모른 채 기여분을 더하기만 한다.

  ┌───────────────────────────────────────────────────────────────┐
  │  ProverKey                                                     │
  │    compute_quotient_i(i, evals, challenges) → FR               │
  │        확장 코셋의 점 i에서의 몫 항. 순수 함수.                  │
  │    compute_quotient_term(domain, evals, challenges) → [FR]     │
  │        확장 도메인 생성(유일한 실패 지점) 후 모든 i에 대해 map.  │
  │    compute_linearisation(evaluations, challenges, l1_eval,     │
  │                          open_polys) → Polynomial              │
  │        셀렉터·열린 다항식은 다항식으로 남기고 나머지는 평가값.   │
  ├───────────────────────────────────────────────────────────────┤
  │  VerifierKey                                                   │
  │    compute_linearisation_commitment(scalars, points,           │
  │        evaluations, challenges, l1_eval, open_comms)           │
  │        선형화 다항식의 각 다항식 항에 대응하는 (스칼라, 커밋먼트) │
  │        쌍을 목록에 덧붙인다.                                     │
  │    linearisation_constant(evaluations, challenges, l1_eval)    │
  │        어떤 커밋 다항식의 배수도 아닌 상수 부분.                 │
  └───────────────────────────────────────────────────────────────┘

**정확성 불변식**:
  유효한 witness이면 compute_quotient_i는 기본 도메인의 모든 점에서 0이고,
  임의의 점 z에서

      Σ scalarₖ · pₖ(z) + linearisation_constant == r(z)

  가 성립한다 (r = compute_linearisation의 결과, pₖ = 커밋된 다항식).
  위젯들은 두 쪽이 같은 계수 함수를 공유하도록 구성되어 있다.

**병렬성**:
  점별 몫 항은 서로 독립이므로 evaluate_quotient는 인덱스 범위를
  조각으로 나눠 ThreadPoolExecutor에서 계산하고, 결과를 제자리에 모은다.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from plonkup.field import FR
from plonkup.polynomial import Polynomial

logger = logging.getLogger(__name__)


def evaluate_quotient(quotient_i, size, evals, challenges, max_workers=None):
    """quotient_i를 0..size-1의 모든 인덱스에 적용한 리스트.

    Args:
        quotient_i: (index, evals, challenges) → FR 순수 함수
        size: 확장 도메인 크기
        evals: QuotientEvaluations
        challenges: Challenges
        max_workers: None 또는 1이면 순차 실행

    Raises:
        ValueError: 평가 테이블 길이가 size와 다를 때
    """
    if len(evals) != size:
        raise ValueError(
            f"평가 테이블 길이 {len(evals)}가 확장 도메인 크기 {size}와 다릅니다"
        )
    if not max_workers or max_workers <= 1:
        return [quotient_i(i, evals, challenges) for i in range(size)]

    chunk = -(-size // max_workers)

    def run(start):
        end = min(start + chunk, size)
        return start, [quotient_i(i, evals, challenges) for i in range(start, end)]

    result = [None] * size
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(run, start) for start in range(0, size, chunk)]
        for future in futures:
            start, values = future.result()
            result[start:start + len(values)] = values
    return result


# ─────────────────────────────────────────────────────────────────────
# 오케스트레이터용 합산
# ─────────────────────────────────────────────────────────────────────

def compute_quotient(prover_keys, domain, evals, challenges, max_workers=None):
    """모든 위젯의 몫 항을 인덱스별로 더한다."""
    total = None
    for key in prover_keys:
        terms = key.compute_quotient_term(domain, evals, challenges, max_workers=max_workers)
        total = terms if total is None else [a + b for a, b in zip(total, terms)]
    logger.debug("몫 항 합산: 위젯 %d개", len(prover_keys))
    return total if total is not None else []


def compute_linearisation(prover_keys, evaluations, challenges, l1_eval, open_polys):
    """모든 위젯의 선형화 다항식 기여분의 합."""
    r_poly = Polynomial.zero()
    for key in prover_keys:
        r_poly = r_poly + key.compute_linearisation(
            evaluations, challenges, l1_eval, open_polys
        )
    return r_poly


def compute_linearisation_commitment(verifier_keys, evaluations, challenges, l1_eval,
                                     open_comms):
    """모든 위젯의 (스칼라, 커밋먼트) 쌍을 모은다."""
    scalars = []
    points = []
    for key in verifier_keys:
        key.compute_linearisation_commitment(
            scalars, points, evaluations, challenges, l1_eval, open_comms
        )
    return scalars, points


def linearisation_constant(verifier_keys, evaluations, challenges, l1_eval):
    """모든 위젯의 상수 기여분의 합."""
    total = FR(0)
    for key in verifier_keys:
        total = total + key.linearisation_constant(evaluations, challenges, l1_eval)
    return total
