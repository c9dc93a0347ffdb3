"""
곡선 덧셈 게이트 위젯 (Twisted Edwards, a = −1)
=================================================

    (x₁, y₁) + (x₂, y₂) = (x₃, y₃)

    x₃ = (x₁y₂ + y₁x₂) / (1 + d·x₁y₂·y₁x₂)
    y₃ = (y₁y₂ + x₁x₂) / (1 − d·x₁y₂·y₁x₂)

**배선 배치** (두 행을 사용):

  | 행    | a  | b  | c  | d    |
  |-------|----|----|----|------|
  | i     | x₁ | y₁ | x₂ | y₂   |
  | i + 1 | x₃ | y₃ | ·  | x₁y₂ |

  곱 x₁·y₂를 보조 배선 d(ωX)에 기록해 두면 세 검사 모두 차수가 낮아진다.

**항등식** (κ = sep²):

  identity = (x₁·y₂ − x₁y₂)
           + κ  · (x₁y₂ + y₁x₂ − x₃·(1 + d·x₁y₂·y₁x₂))
           + κ² · (y₁y₂ + x₁x₂ − y₃·(1 − d·x₁y₂·y₁x₂))

  몫 항:   q_add[i] · identity · sep
  선형화:  q_add(X) · identity(평가값) · sep   (상수 항 없음)
  검증자:  (identity(평가값) · sep, [q_add])

grand product나 정렬이 필요 없으므로 lookup 위젯보다 훨씬 단순하다.
"""

from plonkup.field import FR
from plonkup.widget import evaluate_quotient


def curve_add_identity(x_1, y_1, x_2, y_2, x_3, y_3, x1_y2, kappa, coeff_d):
    """세 검사를 κ의 거듭제곱으로 묶은 값. 유효한 덧셈이면 0."""
    xy_consistency = x_1 * y_2 - x1_y2

    y1_x2 = y_1 * x_2
    y1_y2 = y_1 * y_2
    x1_x2 = x_1 * x_2
    d_term = coeff_d * x1_y2 * y1_x2

    x3_lhs = x1_y2 + y1_x2
    x3_rhs = x_3 + x_3 * d_term
    x3_consistency = (x3_lhs - x3_rhs) * kappa

    y3_lhs = y1_y2 + x1_x2
    y3_rhs = y_3 - y_3 * d_term
    y3_consistency = (y3_lhs - y3_rhs) * kappa * kappa

    return xy_consistency + x3_consistency + y3_consistency


def _evaluations_identity(evaluations, curve_add_sep, coeff_d):
    e = evaluations
    return curve_add_identity(
        e.a_eval, e.b_eval, e.c_eval, e.d_eval,
        e.a_next_eval, e.b_next_eval, e.d_next_eval,
        curve_add_sep * curve_add_sep, coeff_d,
    )


class ProverKey:
    """곡선 덧셈 증명 키.

    속성:
        q_variable_group_add_poly: 셀렉터 (계수 형태)
        q_variable_group_add_evals: 확장 코셋 위의 셀렉터 평가값
        coeff_d: 곡선 상수 d
    """

    def __init__(self, q_variable_group_add_poly, q_variable_group_add_evals, coeff_d):
        self.q_variable_group_add_poly = q_variable_group_add_poly
        self.q_variable_group_add_evals = q_variable_group_add_evals
        self.coeff_d = coeff_d if isinstance(coeff_d, FR) else FR(coeff_d)

    def __eq__(self, other):
        if not isinstance(other, ProverKey):
            return NotImplemented
        return (
            self.q_variable_group_add_poly == other.q_variable_group_add_poly
            and list(self.q_variable_group_add_evals) == list(other.q_variable_group_add_evals)
            and self.coeff_d == other.coeff_d
        )

    def compute_quotient_term(self, domain, evals, challenges, max_workers=None):
        extended = domain.extend()
        return evaluate_quotient(
            self.compute_quotient_i, extended.size, evals, challenges, max_workers
        )

    def compute_quotient_i(self, index, evals, challenges):
        sep = challenges.curve_add_sep
        identity = curve_add_identity(
            evals.w_l[index], evals.w_r[index], evals.w_o[index], evals.w_4[index],
            evals.next("w_l", index), evals.next("w_r", index), evals.next("w_4", index),
            sep * sep, self.coeff_d,
        )
        return self.q_variable_group_add_evals[index] * identity * sep

    def compute_linearisation(self, evaluations, challenges, l1_eval, open_polys):
        sep = challenges.curve_add_sep
        identity = _evaluations_identity(evaluations, sep, self.coeff_d)
        return self.q_variable_group_add_poly * (identity * sep)


class VerifierKey:
    """곡선 덧셈 검증 키."""

    def __init__(self, q_variable_group_add, coeff_d):
        self.q_variable_group_add = q_variable_group_add
        self.coeff_d = coeff_d if isinstance(coeff_d, FR) else FR(coeff_d)

    def __eq__(self, other):
        if not isinstance(other, VerifierKey):
            return NotImplemented
        return (
            self.q_variable_group_add == other.q_variable_group_add
            and self.coeff_d == other.coeff_d
        )

    def compute_linearisation_commitment(self, scalars, points, evaluations, challenges,
                                         l1_eval, open_comms):
        sep = challenges.curve_add_sep
        identity = _evaluations_identity(evaluations, sep, self.coeff_d)
        scalars.append(identity * sep)
        points.append(self.q_variable_group_add)

    def linearisation_constant(self, evaluations, challenges, l1_eval):
        return FR(0)
