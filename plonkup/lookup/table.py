"""
Lookup 테이블 (4열)
====================

회로의 배선 값 (a, b, c, d) 한 행이 반드시 속해야 하는 허용 행들의 목록.
보통 d 열은 0이고, c 열이 a, b에 대한 연산 결과를 담는다.

  | a | b | c = a ⊕ b | d |
  |---|---|-----------|---|
  | 0 | 0 |     0     | 0 |
  | 0 | 1 |     1     | 0 |
  | 1 | 0 |     1     | 0 |
  | 1 | 1 |     0     | 0 |

설정 단계에서 한 번 만들어지고, 이후 네 열은 MultiSet으로 변환되어
lookup 증명 키에 고정된다. 증명마다 같은 ζ로 압축해 단일 열 t를 얻는다.

사용 예시:
    >>> table = LookupTable()
    >>> table.insert_multi_xor(0, 2)   # 2비트 XOR 테이블 (16행)
    >>> table.find_output(3, 1)        # FR(2)
    >>> table.lookup(3, 1, 2)          # FR(0)
"""

from plonkup.errors import NotInTableError
from plonkup.field import FR
from plonkup.lookup.multiset import MultiSet


def _fr(value):
    return value if isinstance(value, FR) else FR(value)


class LookupTable:
    """(a, b, c, d) 행의 목록."""

    def __init__(self, rows=None):
        self.rows = [tuple(_fr(v) for v in row) for row in (rows or [])]

    def __len__(self):
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def insert_row(self, a, b, c, d):
        self.rows.append((_fr(a), _fr(b), _fr(c), _fr(d)))

    # ── 연산 테이블 ──

    def insert_add_row(self, a, b, upper_bound):
        self.insert_row(a, b, (a + b) % upper_bound, 0)

    def insert_mul_row(self, a, b, upper_bound):
        self.insert_row(a, b, (a * b) % upper_bound, 0)

    def insert_xor_row(self, a, b, upper_bound):
        self.insert_row(a, b, (a ^ b) % upper_bound, 0)

    def insert_and_row(self, a, b, upper_bound):
        self.insert_row(a, b, (a & b) % upper_bound, 0)

    def _insert_multi(self, insert, lower, n):
        upper = 1 << n
        for a in range(lower, upper):
            for b in range(lower, upper):
                insert(a, b, upper)

    def insert_multi_add(self, lower, n):
        """lower ≤ a, b < 2^n 인 모든 (a, b)에 대해 a + b mod 2^n 행을 넣는다."""
        self._insert_multi(self.insert_add_row, lower, n)

    def insert_multi_mul(self, lower, n):
        self._insert_multi(self.insert_mul_row, lower, n)

    def insert_multi_xor(self, lower, n):
        self._insert_multi(self.insert_xor_row, lower, n)

    def insert_multi_and(self, lower, n):
        self._insert_multi(self.insert_and_row, lower, n)

    # ── 조회 / 변환 ──

    def lookup(self, a, b, c):
        """(a, b, c)로 시작하는 행의 d 값을 반환한다.

        Raises:
            NotInTableError: 해당 행이 없을 때
        """
        key = (_fr(a), _fr(b), _fr(c))
        for row in self.rows:
            if row[:3] == key:
                return row[3]
        raise NotInTableError(key)

    def find_output(self, a, b):
        """(a, b)에 대응하는 c 값 (없으면 None)."""
        a, b = _fr(a), _fr(b)
        for row in self.rows:
            if row[0] == a and row[1] == b:
                return row[2]
        return None

    def to_multisets(self):
        """네 개의 열 MultiSet (table_1, ..., table_4)."""
        columns = (MultiSet(), MultiSet(), MultiSet(), MultiSet())
        for row in self.rows:
            for column, value in zip(columns, row):
                column.push(value)
        return columns

    def compress(self, zeta):
        """행마다 lc(행, ζ)를 계산한 단일 열 t."""
        return MultiSet.compress(self.to_multisets(), zeta)
