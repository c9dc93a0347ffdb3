"""
공유 픽스처: 결정론적 챌린지, 1비트 XOR lookup witness, 곡선 덧셈 witness.

lookup witness (n = 4):
  테이블  (0,0,0,0) (0,1,1,0) (1,0,1,0) (1,1,0,0)
  행 0  q=1  (1, 1, 0, 0)
  행 1  q=1  (0, 1, 1, 0)
  행 2  q=0  (5, 6, 7, 8)   ← 질의하지 않는 행, f는 테이블 첫 행으로 채움
  행 3  q=1  (1, 0, 1, 0)

곡선 덧셈 witness (n = 4):
  행 0  q=1  (x₁, y₁, x₂, y₂)
  행 1  q=0  (x₃, y₃, 0, x₁y₂)
  행 2, 3    0
"""

import random

import pytest

from plonkup.domain import (
    EvaluationDomain,
    coset_evaluations,
    first_lagrange_coset_evals,
)
from plonkup.evaluations import Challenges, ProofEvaluations, QuotientEvaluations
from plonkup.field import FR, CURVE_ORDER
from plonkup.lookup.accumulator import (
    compute_lookup_accumulator,
    compute_query_column,
    sorted_lists,
)
from plonkup.kzg import KZG10
from plonkup.lookup.table import LookupTable
from plonkup.srs import SRS
from plonkup.widget import ecc, lookup


N = 4

# 곡선 덧셈 테스트용 곡선 상수와 입력 점
COEFF_D = FR(168696)
P1 = (FR(3), FR(5))
P2 = (FR(7), FR(11))


def random_fr(rng):
    return FR(rng.randrange(1, CURVE_ORDER))


def edwards_add(p1, p2, coeff_d):
    """a = −1 twisted Edwards 덧셈 공식."""
    x_1, y_1 = p1
    x_2, y_2 = p2
    t = coeff_d * x_1 * y_2 * y_1 * x_2
    x_3 = (x_1 * y_2 + y_1 * x_2) / (FR(1) + t)
    y_3 = (y_1 * y_2 + x_1 * x_2) / (FR(1) - t)
    return x_3, y_3


def point_evaluations(polys, point, omega):
    """각 다항식의 [p(z), p(zω)] 두 점 평가 테이블 (shift = 1)."""
    return {name: [p.evaluate(point), p.evaluate(point * omega)]
            for name, p in polys.items()}


def proof_evaluations(polys, point, omega):
    """챌린지 점 z에서의 ProofEvaluations."""
    z = point
    zw = point * omega
    return ProofEvaluations(
        a_eval=polys["w_l"].evaluate(z),
        b_eval=polys["w_r"].evaluate(z),
        c_eval=polys["w_o"].evaluate(z),
        d_eval=polys["w_4"].evaluate(z),
        a_next_eval=polys["w_l"].evaluate(zw),
        b_next_eval=polys["w_r"].evaluate(zw),
        d_next_eval=polys["w_4"].evaluate(zw),
        q_lookup_eval=polys["q_lookup"].evaluate(z),
        f_eval=polys["f"].evaluate(z),
        table_eval=polys["table"].evaluate(z),
        table_next_eval=polys["table"].evaluate(zw),
        h1_eval=polys["h1"].evaluate(z),
        h1_next_eval=polys["h1"].evaluate(zw),
        h2_eval=polys["h2"].evaluate(z),
        z2_next_eval=polys["z2"].evaluate(zw),
    )


# ─────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def challenges():
    """고정 시드에서 뽑은 챌린지."""
    rng = random.Random(2024)
    return Challenges(
        delta=random_fr(rng),
        epsilon=random_fr(rng),
        zeta=random_fr(rng),
        lookup_sep=random_fr(rng),
        curve_add_sep=random_fr(rng),
    )


@pytest.fixture(scope="session")
def challenge_point():
    """선형화 검사용 점 z (H 밖)."""
    return random_fr(random.Random(77))


@pytest.fixture(scope="session")
def srs():
    return SRS.generate(max_degree=16, seed=42)


@pytest.fixture(scope="session")
def kzg(srs):
    """SRS를 묶은 커밋먼트 스킴 객체."""
    return KZG10(srs)


@pytest.fixture(scope="session")
def domain():
    return EvaluationDomain.new(N)


@pytest.fixture(scope="session")
def xor_table():
    table = LookupTable()
    table.insert_multi_xor(0, 1)
    return table


@pytest.fixture(scope="session")
def lookup_witness(challenges, xor_table, domain):
    """기본 도메인 위의 lookup witness 전체 (dict)."""
    q_lookup = [FR(1), FR(1), FR(0), FR(1)]
    w_l = [FR(1), FR(0), FR(5), FR(1)]
    w_r = [FR(1), FR(1), FR(6), FR(0)]
    w_o = [FR(0), FR(1), FR(7), FR(1)]
    w_4 = [FR(0), FR(0), FR(8), FR(0)]

    table_columns = xor_table.to_multisets()
    t = xor_table.compress(challenges.zeta)
    f = compute_query_column(q_lookup, w_l, w_r, w_o, w_4, table_columns, challenges.zeta)
    h1, h2 = sorted_lists(f, t)
    z2 = compute_lookup_accumulator(f, t, h1, h2, challenges.delta, challenges.epsilon)

    base = {
        "q_lookup": q_lookup,
        "w_l": w_l, "w_r": w_r, "w_o": w_o, "w_4": w_4,
        "f": list(f), "table": list(t), "h1": list(h1), "h2": list(h2), "z2": z2,
    }
    polys = {name: domain.interpolate(values) for name, values in base.items()}
    return {
        "base": base,
        "polys": polys,
        "table_columns": table_columns,
        "f": f, "t": t, "h1": h1, "h2": h2,
    }


@pytest.fixture(scope="session")
def lookup_prover_key(lookup_witness, domain):
    return lookup.ProverKey.from_selector(
        lookup_witness["base"]["q_lookup"], lookup_witness["table_columns"], domain
    )


@pytest.fixture(scope="session")
def lookup_extended_evals(lookup_witness, domain):
    """확장 코셋 위의 lookup 평가 테이블."""
    polys = lookup_witness["polys"]
    columns = {
        name: coset_evaluations(polys[name], domain)
        for name in ("w_l", "w_r", "w_o", "w_4", "f", "table", "h1", "h2", "z2")
    }
    return QuotientEvaluations(l1=first_lagrange_coset_evals(domain), **columns)


@pytest.fixture(scope="session")
def ecc_witness(domain):
    x_3, y_3 = edwards_add(P1, P2, COEFF_D)
    x_1, y_1 = P1
    x_2, y_2 = P2
    zero = FR(0)
    base = {
        "q_add": [FR(1), zero, zero, zero],
        "w_l": [x_1, x_3, zero, zero],
        "w_r": [y_1, y_3, zero, zero],
        "w_o": [x_2, zero, zero, zero],
        "w_4": [y_2, x_1 * y_2, zero, zero],
    }
    polys = {name: domain.interpolate(values) for name, values in base.items()}
    return {"base": base, "polys": polys}


@pytest.fixture(scope="session")
def ecc_prover_key(ecc_witness, domain):
    q_poly = ecc_witness["polys"]["q_add"]
    return ecc.ProverKey(q_poly, coset_evaluations(q_poly, domain), COEFF_D)
