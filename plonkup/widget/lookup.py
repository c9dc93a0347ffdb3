"""
Lookup 게이트 위젯 (Plookup)
=============================

회로의 배선 한 행 (a, b, c, d)가 lookup 테이블의 어떤 행과 같음을
멀티셋 동등성 논증으로 증명한다.

**몫 항 (확장 코셋의 점 i, 다음 행 = i + 4)**:

  T = α  · q_lookup[i] · (compress(a, b, c, d, ζ) − f[i])
    + α² · z2[i] · (1+δ) · (ε + f[i]) · (ε(1+δ) + t[i] + δ·t[i+4])
    − α² · z2[i+4] · (ε(1+δ) + h1[i] + δ·h2[i]) · (ε(1+δ) + h2[i] + δ·h1[i+4])
    + α³ · (z2[i] − 1) · L₁[i]

  α = lookup_sep. 첫째 항은 f가 배선 행의 압축값임을, 둘째·셋째 항은
  z2의 점화식을, 넷째 항은 경계 조건 z2(ω⁰) = 1을 강제한다.

**선형화 (챌린지 점 z)**:

  r(X) = q_lookup(X) · α·(compress(ā, b̄, c̄, d̄, ζ) − f̄)
       + z2(X)       · [α²·(1+δ)(ε+f̄)(ε(1+δ) + t̄ + δ·t̄ω) + α³·L₁(z)]
       − h1(X)       · α²·z̄2ω·(ε(1+δ) + h̄2 + δ·h̄1ω)
       − α²·z̄2ω·(ε(1+δ) + δ·h̄2)·(ε(1+δ) + h̄2 + δ·h̄1ω)   ← 상수
       − α³·L₁(z)                                          ← 상수

  검증자는 같은 세 계수를 [q_lookup], [z2], [h1] 커밋먼트에 곱한다.
"""

from plonkup.domain import Evaluations
from plonkup.field import FR
from plonkup.lookup.multiset import MultiSet
from plonkup.polynomial import Polynomial
from plonkup.utils import compress
from plonkup.widget import evaluate_quotient


def _linearisation_scalars(evaluations, challenges, l1_eval):
    """(q_lookup 계수, z2 계수, h1 계수, 상수)를 평가값만으로 계산한다.

    증명자의 선형화와 검증자의 커밋먼트 기여분이 이 함수를 공유한다.
    """
    e = evaluations
    delta = challenges.delta
    epsilon = challenges.epsilon
    lookup_sep = challenges.lookup_sep

    lookup_sep_sq = lookup_sep * lookup_sep
    lookup_sep_cu = lookup_sep_sq * lookup_sep
    one_plus_delta = FR(1) + delta
    epsilon_one_plus_delta = epsilon * one_plus_delta

    compressed = compress(e.a_eval, e.b_eval, e.c_eval, e.d_eval, challenges.zeta)
    q_lookup_scalar = (compressed - e.f_eval) * lookup_sep

    # (1+δ)(ε + f̄)(ε(1+δ) + t̄ + δ·t̄ω)·α² + L₁(z)·α³
    z2_scalar = (
        one_plus_delta
        * (epsilon + e.f_eval)
        * (epsilon_one_plus_delta + e.table_eval + delta * e.table_next_eval)
        * lookup_sep_sq
        + l1_eval * lookup_sep_cu
    )

    # −z̄2ω·(ε(1+δ) + h̄2 + δ·h̄1ω)·α², h1(X)가 첫 인수 안에 한 번 등장
    second_factor = epsilon_one_plus_delta + e.h2_eval + delta * e.h1_next_eval
    h1_scalar = -e.z2_next_eval * second_factor * lookup_sep_sq

    constant = (
        -e.z2_next_eval
        * (epsilon_one_plus_delta + delta * e.h2_eval)
        * second_factor
        * lookup_sep_sq
        - l1_eval * lookup_sep_cu
    )
    return q_lookup_scalar, z2_scalar, h1_scalar, constant


class ProverKey:
    """lookup 증명 키.

    속성:
        q_lookup_poly: lookup 셀렉터 (계수 형태, 선형화용)
        q_lookup_evals: 확장 코셋 위의 셀렉터 평가값 (몫 계산용)
        table_1, table_2, table_3, table_4: 테이블의 네 열 (MultiSet)
    """

    def __init__(self, q_lookup_poly, q_lookup_evals, table_1, table_2, table_3, table_4):
        self.q_lookup_poly = q_lookup_poly
        self.q_lookup_evals = q_lookup_evals
        self.table_1 = table_1
        self.table_2 = table_2
        self.table_3 = table_3
        self.table_4 = table_4

    def __eq__(self, other):
        if not isinstance(other, ProverKey):
            return NotImplemented
        return (
            self.q_lookup_poly == other.q_lookup_poly
            and list(self.q_lookup_evals) == list(other.q_lookup_evals)
            and self.tables() == other.tables()
        )

    def tables(self):
        return (self.table_1, self.table_2, self.table_3, self.table_4)

    def compute_quotient_term(self, domain, evals, challenges, max_workers=None):
        """확장 코셋의 모든 점에서 lookup 몫 항을 계산한다.

        Raises:
            InvalidEvalDomainSize: 4n 도메인을 만들 수 없을 때
        """
        extended = domain.extend()
        return evaluate_quotient(
            self.compute_quotient_i, extended.size, evals, challenges, max_workers
        )

    def compute_quotient_i(self, index, evals, challenges):
        delta = challenges.delta
        epsilon = challenges.epsilon
        lookup_sep = challenges.lookup_sep

        q_lookup_i = self.q_lookup_evals[index]
        f_i = evals.f[index]
        z2_i = evals.z2[index]
        h1_i = evals.h1[index]
        h2_i = evals.h2[index]

        lookup_sep_sq = lookup_sep * lookup_sep
        lookup_sep_cu = lookup_sep_sq * lookup_sep
        one_plus_delta = FR(1) + delta
        epsilon_one_plus_delta = epsilon * one_plus_delta

        compressed_tuple = self.compress(
            evals.w_l[index], evals.w_r[index], evals.w_o[index], evals.w_4[index],
            challenges.zeta,
        )
        a = q_lookup_i * (compressed_tuple - f_i) * lookup_sep

        b = (
            z2_i
            * one_plus_delta
            * (epsilon + f_i)
            * (epsilon_one_plus_delta + evals.table[index] + delta * evals.next("table", index))
            * lookup_sep_sq
        )

        c = (
            -evals.next("z2", index)
            * (epsilon_one_plus_delta + h1_i + delta * h2_i)
            * (epsilon_one_plus_delta + h2_i + delta * evals.next("h1", index))
            * lookup_sep_sq
        )

        d = (z2_i - FR(1)) * evals.l1[index] * lookup_sep_cu

        return a + b + c + d

    def compute_linearisation(self, evaluations, challenges, l1_eval, open_polys):
        q_lookup_scalar, z2_scalar, h1_scalar, constant = _linearisation_scalars(
            evaluations, challenges, l1_eval
        )
        return (
            self.q_lookup_poly * q_lookup_scalar
            + open_polys.z2_poly * z2_scalar
            + open_polys.h1_poly * h1_scalar
            + Polynomial([constant])
        )

    @staticmethod
    def compress(w_l, w_r, w_o, w_4, zeta):
        """한 행을 랜덤 선형 결합으로 하나의 필드 원소로 압축한다."""
        return compress(w_l, w_r, w_o, w_4, zeta)

    @classmethod
    def from_selector(cls, q_lookup_values, table_columns, domain):
        """기본 도메인 위의 셀렉터 값과 테이블 열로 키를 구성한다.

        테이블 열은 복사본을 domain 크기로 패딩한다 (인자는 바뀌지 않는다).
        """
        q_lookup_poly = domain.interpolate(q_lookup_values)
        extended = domain.extend()
        q_lookup_evals = Evaluations(extended.coset_fft(q_lookup_poly.coeffs), extended)
        tables = []
        for column in table_columns:
            padded = MultiSet(list(column))
            padded.pad(domain.size)
            tables.append(padded)
        return cls(q_lookup_poly, q_lookup_evals, *tables)


class VerifierKey:
    """lookup 검증 키: 셀렉터 커밋먼트만 가진다."""

    def __init__(self, q_lookup):
        self.q_lookup = q_lookup

    def __eq__(self, other):
        if not isinstance(other, VerifierKey):
            return NotImplemented
        return self.q_lookup == other.q_lookup

    def compute_linearisation_commitment(self, scalars, points, evaluations, challenges,
                                         l1_eval, open_comms):
        """[q_lookup], [z2], [h1]에 대한 세 쌍을 덧붙인다."""
        q_lookup_scalar, z2_scalar, h1_scalar, _ = _linearisation_scalars(
            evaluations, challenges, l1_eval
        )
        scalars.append(q_lookup_scalar)
        points.append(self.q_lookup)

        scalars.append(z2_scalar)
        points.append(open_comms.z2_comm)

        scalars.append(h1_scalar)
        points.append(open_comms.h1_comm)

    def linearisation_constant(self, evaluations, challenges, l1_eval):
        return _linearisation_scalars(evaluations, challenges, l1_eval)[3]
