"""
Plonkup 데이터 직렬화/역직렬화 헬퍼
====================================

TinyDB에 저장 가능한 형태로 위젯 키와 그 구성 요소를 변환한다.
FR, G1, Polynomial, FR 리스트, MultiSet, Evaluations, ProofEvaluations,
lookup/곡선 덧셈 증명·검증 키.

모든 필드 원소는 10진수 문자열(str(int))로 저장한다.
"""

from py_ecc.fields import bn128_FQ as FQ

from plonkup.domain import EvaluationDomain, Evaluations
from plonkup.evaluations import ProofEvaluations
from plonkup.field import FR
from plonkup.lookup.multiset import MultiSet
from plonkup.polynomial import Polynomial
from plonkup.widget import ecc, lookup


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


def deserialize_fr(s):
    """str(int) → FR"""
    return FR(int(s))


# ─── G1 point ───

def serialize_g1(point):
    """G1 point → [str, str] or None"""
    if point is None:
        return None
    return [str(int(point[0])), str(int(point[1]))]


def deserialize_g1(data):
    """[str, str] or None → G1 point"""
    if data is None:
        return None
    return (FQ(int(data[0])), FQ(int(data[1])))


# ─── Polynomial ───

def serialize_poly(poly):
    """Polynomial → list of str (계수)"""
    if poly is None:
        return None
    return [str(int(c)) for c in poly.coeffs]


def deserialize_poly(data):
    if data is None:
        return None
    return Polynomial([FR(int(s)) for s in data])


# ─── FR list / MultiSet / Evaluations ───

def serialize_fr_list(lst):
    """list[FR] → list[str]"""
    return [str(int(v)) for v in lst]


def deserialize_fr_list(data):
    """list[str] → list[FR]"""
    return [FR(int(s)) for s in data]


def serialize_multiset(multiset):
    return serialize_fr_list(multiset)


def deserialize_multiset(data):
    return MultiSet(deserialize_fr_list(data))


def serialize_evaluations(evaluations):
    """Evaluations → {"evals": [...], "domain_size": n}"""
    return {
        "evals": serialize_fr_list(evaluations),
        "domain_size": evaluations.domain.size,
    }


def deserialize_evaluations(data):
    domain = EvaluationDomain(data["domain_size"])
    return Evaluations(deserialize_fr_list(data["evals"]), domain)


# ─── ProofEvaluations ───

def serialize_proof_evaluations(evaluations):
    """ProofEvaluations → dict (값이 없는 필드는 None)"""
    result = {}
    for name in ProofEvaluations.FIELDS:
        value = getattr(evaluations, name)
        result[name] = serialize_fr(value) if value is not None else None
    return result


def deserialize_proof_evaluations(data):
    kwargs = {}
    for name in ProofEvaluations.FIELDS:
        value = data.get(name)
        kwargs[name] = deserialize_fr(value) if value is not None else None
    return ProofEvaluations(**kwargs)


# ─── Lookup 키 ───

def serialize_lookup_prover_key(key):
    """lookup.ProverKey → dict"""
    return {
        "q_lookup_poly": serialize_poly(key.q_lookup_poly),
        "q_lookup_evals": serialize_evaluations(key.q_lookup_evals),
        "table_1": serialize_multiset(key.table_1),
        "table_2": serialize_multiset(key.table_2),
        "table_3": serialize_multiset(key.table_3),
        "table_4": serialize_multiset(key.table_4),
    }


def deserialize_lookup_prover_key(data):
    """dict → lookup.ProverKey"""
    return lookup.ProverKey(
        q_lookup_poly=deserialize_poly(data["q_lookup_poly"]),
        q_lookup_evals=deserialize_evaluations(data["q_lookup_evals"]),
        table_1=deserialize_multiset(data["table_1"]),
        table_2=deserialize_multiset(data["table_2"]),
        table_3=deserialize_multiset(data["table_3"]),
        table_4=deserialize_multiset(data["table_4"]),
    )


def serialize_lookup_verifier_key(key):
    return {"q_lookup": serialize_g1(key.q_lookup)}


def deserialize_lookup_verifier_key(data):
    return lookup.VerifierKey(deserialize_g1(data["q_lookup"]))


# ─── 곡선 덧셈 키 ───

def serialize_ecc_prover_key(key):
    """ecc.ProverKey → dict"""
    return {
        "q_variable_group_add_poly": serialize_poly(key.q_variable_group_add_poly),
        "q_variable_group_add_evals": serialize_evaluations(key.q_variable_group_add_evals),
        "coeff_d": serialize_fr(key.coeff_d),
    }


def deserialize_ecc_prover_key(data):
    """dict → ecc.ProverKey"""
    return ecc.ProverKey(
        q_variable_group_add_poly=deserialize_poly(data["q_variable_group_add_poly"]),
        q_variable_group_add_evals=deserialize_evaluations(data["q_variable_group_add_evals"]),
        coeff_d=deserialize_fr(data["coeff_d"]),
    )


def serialize_ecc_verifier_key(key):
    return {
        "q_variable_group_add": serialize_g1(key.q_variable_group_add),
        "coeff_d": serialize_fr(key.coeff_d),
    }


def deserialize_ecc_verifier_key(data):
    return ecc.VerifierKey(
        q_variable_group_add=deserialize_g1(data["q_variable_group_add"]),
        coeff_d=deserialize_fr(data["coeff_d"]),
    )


# ─── 키 종류 표 ───

# 저장 문서의 "kind" 값 → (클래스, 직렬화, 역직렬화)
KEY_KINDS = {
    "lookup.prover": (
        lookup.ProverKey, serialize_lookup_prover_key, deserialize_lookup_prover_key,
    ),
    "lookup.verifier": (
        lookup.VerifierKey, serialize_lookup_verifier_key, deserialize_lookup_verifier_key,
    ),
    "ecc.prover": (
        ecc.ProverKey, serialize_ecc_prover_key, deserialize_ecc_prover_key,
    ),
    "ecc.verifier": (
        ecc.VerifierKey, serialize_ecc_verifier_key, deserialize_ecc_verifier_key,
    ),
}


def key_kind(key):
    """키 객체의 종류 이름.

    Raises:
        TypeError: 지원하지 않는 객체일 때
    """
    for kind, (cls, _, _) in KEY_KINDS.items():
        if type(key) is cls:
            return kind
    raise TypeError(f"직렬화할 수 없는 키 타입: {type(key).__name__}")


def serialize_key(key):
    """위젯 키 → {"kind": ..., "data": {...}}"""
    kind = key_kind(key)
    return {"kind": kind, "data": KEY_KINDS[kind][1](key)}


def deserialize_key(doc):
    """{"kind": ..., "data": {...}} → 위젯 키

    Raises:
        ValueError: 알 수 없는 kind일 때
    """
    kind = doc.get("kind")
    if kind not in KEY_KINDS:
        raise ValueError(f"알 수 없는 키 종류: {kind}")
    return KEY_KINDS[kind][2](doc["data"])
