"""
위젯 계약 테스트: 오케스트레이터 합산, 병렬 평가, 설정 오류.
"""

import pytest

from plonkup.domain import EvaluationDomain
from plonkup.errors import InvalidEvalDomainSize
from plonkup.evaluations import OpenCommitments, OpenPolynomials, QuotientEvaluations
from plonkup.field import FR
from plonkup.widget import (
    compute_linearisation,
    compute_linearisation_commitment,
    compute_quotient,
    evaluate_quotient,
    linearisation_constant,
)
from plonkup.widget import ecc, lookup

from conftest import COEFF_D, proof_evaluations


@pytest.fixture(scope="module")
def evaluations(lookup_witness, domain, challenge_point):
    return proof_evaluations(lookup_witness["polys"], challenge_point, domain.omega)


@pytest.fixture(scope="module")
def l1_eval(domain, challenge_point):
    return domain.evaluate_first_lagrange(challenge_point)


@pytest.fixture(scope="module")
def verifier_keys(lookup_witness, ecc_witness, kzg):
    return [
        lookup.VerifierKey(kzg.commit(lookup_witness["polys"]["q_lookup"])),
        ecc.VerifierKey(kzg.commit(ecc_witness["polys"]["q_add"]), COEFF_D),
    ]


@pytest.fixture(scope="module")
def open_comms(lookup_witness, kzg):
    polys = lookup_witness["polys"]
    return OpenCommitments(z2_comm=kzg.commit(polys["z2"]), h1_comm=kzg.commit(polys["h1"]))


# ─────────────────────────────────────────────────────────────────────
# evaluate_quotient
# ─────────────────────────────────────────────────────────────────────

class TestEvaluateQuotient:

    @staticmethod
    def index_square(index, evals, challenges):
        return FR(index) * FR(index) + evals.w_l[index]

    def make_evals(self, size):
        return QuotientEvaluations(w_l=[FR(3 * i) for i in range(size)])

    def test_sequential(self):
        evals = self.make_evals(10)
        result = evaluate_quotient(self.index_square, 10, evals, None)
        assert result == [FR(i * i + 3 * i) for i in range(10)]

    @pytest.mark.parametrize("workers", [2, 3, 4, 16])
    def test_parallel_keeps_order(self, workers):
        evals = self.make_evals(10)
        sequential = evaluate_quotient(self.index_square, 10, evals, None)
        parallel = evaluate_quotient(self.index_square, 10, evals, None, max_workers=workers)
        assert parallel == sequential

    def test_length_mismatch(self):
        evals = self.make_evals(8)
        with pytest.raises(ValueError):
            evaluate_quotient(self.index_square, 16, evals, None)


# ─────────────────────────────────────────────────────────────────────
# 합산 (fold)
# ─────────────────────────────────────────────────────────────────────

class TestFolds:

    def test_compute_quotient_is_index_sum(self, lookup_prover_key, ecc_prover_key, domain,
                                           lookup_extended_evals, challenges):
        keys = [lookup_prover_key, ecc_prover_key]
        total = compute_quotient(keys, domain, lookup_extended_evals, challenges)
        first = lookup_prover_key.compute_quotient_term(domain, lookup_extended_evals, challenges)
        second = ecc_prover_key.compute_quotient_term(domain, lookup_extended_evals, challenges)
        assert total == [a + b for a, b in zip(first, second)]

    def test_compute_quotient_no_widgets(self, domain, lookup_extended_evals, challenges):
        assert compute_quotient([], domain, lookup_extended_evals, challenges) == []

    def test_linearisation_is_sum(self, lookup_witness, lookup_prover_key, ecc_prover_key,
                                  evaluations, l1_eval, challenges):
        polys = lookup_witness["polys"]
        open_polys = OpenPolynomials(z2_poly=polys["z2"], h1_poly=polys["h1"])
        keys = [lookup_prover_key, ecc_prover_key]
        r_poly = compute_linearisation(keys, evaluations, challenges, l1_eval, open_polys)
        expected = (
            lookup_prover_key.compute_linearisation(evaluations, challenges, l1_eval, open_polys)
            + ecc_prover_key.compute_linearisation(evaluations, challenges, l1_eval, open_polys)
        )
        assert r_poly == expected

    def test_commitment_pairs_in_key_order(self, verifier_keys, open_comms, evaluations,
                                           l1_eval, challenges):
        scalars, points = compute_linearisation_commitment(
            verifier_keys, evaluations, challenges, l1_eval, open_comms
        )
        assert len(scalars) == len(points) == 4
        assert points[0] == verifier_keys[0].q_lookup
        assert points[3] == verifier_keys[1].q_variable_group_add

    def test_agreement_across_widgets(self, lookup_witness, ecc_witness, lookup_prover_key,
                                      ecc_prover_key, verifier_keys, open_comms, evaluations,
                                      l1_eval, challenges, challenge_point):
        """Σ sₖ·pₖ(z) + Σ 상수 == Σ rⱼ(z)"""
        polys = lookup_witness["polys"]
        open_polys = OpenPolynomials(z2_poly=polys["z2"], h1_poly=polys["h1"])
        r_poly = compute_linearisation(
            [lookup_prover_key, ecc_prover_key], evaluations, challenges, l1_eval, open_polys
        )
        scalars, _ = compute_linearisation_commitment(
            verifier_keys, evaluations, challenges, l1_eval, open_comms
        )
        committed = [polys["q_lookup"], polys["z2"], polys["h1"], ecc_witness["polys"]["q_add"]]

        total = linearisation_constant(verifier_keys, evaluations, challenges, l1_eval)
        for scalar, poly in zip(scalars, committed):
            total = total + scalar * poly.evaluate(challenge_point)
        assert total == r_poly.evaluate(challenge_point)

    def test_commitment_agreement_across_widgets(self, lookup_witness, lookup_prover_key,
                                                 ecc_prover_key, verifier_keys, open_comms,
                                                 evaluations, l1_eval, challenges, kzg):
        """commit(Σ rⱼ − Σ 상수) == MSM(scalars, points)"""
        polys = lookup_witness["polys"]
        open_polys = OpenPolynomials(z2_poly=polys["z2"], h1_poly=polys["h1"])
        r_poly = compute_linearisation(
            [lookup_prover_key, ecc_prover_key], evaluations, challenges, l1_eval, open_polys
        )
        scalars, points = compute_linearisation_commitment(
            verifier_keys, evaluations, challenges, l1_eval, open_comms
        )
        constant = linearisation_constant(verifier_keys, evaluations, challenges, l1_eval)
        assert kzg.commit(r_poly - constant) == kzg.multiscalar_mul(scalars, points)

    def test_constant_is_lookup_only(self, verifier_keys, evaluations, l1_eval, challenges):
        assert linearisation_constant(verifier_keys, evaluations, challenges, l1_eval) == (
            verifier_keys[0].linearisation_constant(evaluations, challenges, l1_eval)
        )


# ─────────────────────────────────────────────────────────────────────
# 설정 오류
# ─────────────────────────────────────────────────────────────────────

class TestConfigurationError:
    """확장 도메인 크기가 2^28을 넘으면 점별 계산 전에 실패한다."""

    @pytest.fixture(scope="class")
    def large_domain(self):
        return EvaluationDomain(2 ** 27)

    def test_lookup_quotient_term(self, large_domain, lookup_prover_key, challenges):
        with pytest.raises(InvalidEvalDomainSize) as exc_info:
            lookup_prover_key.compute_quotient_term(
                large_domain, QuotientEvaluations(w_l=[]), challenges
            )
        assert exc_info.value.log_size_of_group == 29
        assert exc_info.value.adicity == 28

    def test_ecc_quotient_term(self, large_domain, ecc_prover_key, challenges):
        with pytest.raises(InvalidEvalDomainSize):
            ecc_prover_key.compute_quotient_term(
                large_domain, QuotientEvaluations(w_l=[]), challenges
            )

    def test_fold_propagates(self, large_domain, lookup_prover_key, challenges):
        with pytest.raises(InvalidEvalDomainSize):
            compute_quotient([lookup_prover_key], large_domain,
                             QuotientEvaluations(w_l=[]), challenges)

    def test_is_value_error(self):
        assert issubclass(InvalidEvalDomainSize, ValueError)
