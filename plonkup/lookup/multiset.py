"""
MultiSet: lookup 열(column)의 순서 있는 필드 원소 목록
=========================================================

lookup 테이블의 한 열, 압축된 질의 열 f, 정렬·분할된 h1/h2 모두
MultiSet으로 표현한다.

**순서의 의미**:
  삽입 순서가 곧 테이블의 행 인덱스이다. 같음(equality) 판정은 순서를
  포함하지만, Plookup의 멀티셋 동등성 논증은 원소를 주머니(bag)로 본다.

**패딩**:
  도메인 평가 전에 길이를 2의 거듭제곱으로 맞춘다. 마지막 원소를
  반복하므로, 패딩이 테이블에 없는 값을 새로 만들지 않는다.

**정렬과 분할**:
  s = sort(f ∪ t) 를 두 개의 반쪽으로 나눈다.

    halve()            h1 = s[:k+1], h2 = s[k:]   (겹치는 분할, |s| 홀수)
                       h1[-1] == h2[0]
    halve_alternating()  h1 = s[0::2], h2 = s[1::2]  (|s| 짝수)
                       s의 연속 쌍은 (h1[i], h2[i]), (h2[i], h1[i+1])

  위젯의 몫 항은 교대(alternating) 분할을 기준으로 쓰여 있다.
"""

from collections import Counter

from plonkup.errors import NotInTableError
from plonkup.field import FR
from plonkup.polynomial import Polynomial
from plonkup.utils import is_power_of_2, lc


class MultiSet:
    """순서 있는 FR 원소 목록.

    예시:
        >>> m = MultiSet([1, 2, 3])
        >>> m.pad(4)
        >>> list(m)   # [FR(1), FR(2), FR(3), FR(3)]
    """

    def __init__(self, values=None):
        self.values = [v if isinstance(v, FR) else FR(v) for v in (values or [])]

    def push(self, value):
        self.values.append(value if isinstance(value, FR) else FR(value))

    def __len__(self):
        return len(self.values)

    def __iter__(self):
        return iter(self.values)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return MultiSet(self.values[index])
        return self.values[index]

    def __eq__(self, other):
        if not isinstance(other, MultiSet):
            return NotImplemented
        return self.values == other.values

    def __add__(self, other):
        """이어 붙이기 (순서 유지)."""
        return MultiSet(self.values + list(other))

    def __repr__(self):
        return f"MultiSet({[int(v) for v in self.values]})"

    def is_empty(self):
        return not self.values

    def contains(self, value):
        return value in self.values

    def counts(self):
        """주머니 표현: {int(값): 개수}."""
        return Counter(int(v) for v in self.values)

    def is_subset_of(self, other):
        """self의 모든 값이 other에 있는지 (개수는 보지 않는다)."""
        support = set(int(v) for v in other)
        return all(int(v) in support for v in self.values)

    def pad(self, n):
        """길이 n(2의 거듭제곱)까지 마지막 원소를 반복해 채운다.

        Raises:
            ValueError: n이 2의 거듭제곱이 아니거나 현재 길이보다 작을 때
        """
        if not is_power_of_2(n):
            raise ValueError(f"패딩 길이는 2의 거듭제곱이어야 합니다: {n}")
        if n < len(self.values):
            raise ValueError(
                f"패딩 길이 {n}이 현재 길이 {len(self.values)}보다 작습니다"
            )
        fill = self.values[-1] if self.values else FR(0)
        self.values.extend([fill] * (n - len(self.values)))

    def evaluations(self):
        """도메인 평가값 (지연 생성)."""
        return (v for v in self.values)

    def to_polynomial(self, domain):
        """이 열을 domain 위의 평가값으로 보고 보간한다."""
        return Polynomial(domain.ifft(self.values))

    def sorted_concat(self, table):
        """self ∪ table 을 table의 행 순서에 따라 정렬한다.

        table은 순서를 그대로 유지하고, self의 각 값은 table에서 같은 값이
        처음 나타나는 자리 바로 뒤에 끼워 넣는다. 따라서 s의 연속 쌍은
        table의 연속 쌍 (tᵢ, tᵢ₊₁)과 반복 쌍 (v, v)뿐이다. table에 같은 값이
        떨어져 여러 번 있어도 table 자체는 재배열되지 않는다.

        Raises:
            NotInTableError: self에 table에 없는 값이 있을 때
        """
        support = set(int(v) for v in table)
        pending = Counter()
        for v in self.values:
            if int(v) not in support:
                raise NotInTableError(v)
            pending[int(v)] += 1

        merged = []
        for v in table:
            merged.append(v)
            key = int(v)
            if pending[key]:
                merged.extend([v] * pending[key])
                pending[key] = 0
        return MultiSet(merged)

    def halve(self):
        """겹치는 두 반쪽 (h1, h2)로 나눈다. h1의 마지막 == h2의 처음.

        Raises:
            ValueError: 길이가 홀수가 아닐 때
        """
        if len(self.values) % 2 != 1:
            raise ValueError(
                f"겹치는 분할은 홀수 길이에서만 정의됩니다: {len(self.values)}"
            )
        mid = len(self.values) // 2
        return MultiSet(self.values[:mid + 1]), MultiSet(self.values[mid:])

    def halve_alternating(self):
        """짝수/홀수 위치로 교대 분할한다.

        Raises:
            ValueError: 길이가 짝수가 아닐 때
        """
        if len(self.values) % 2 != 0:
            raise ValueError(
                f"교대 분할은 짝수 길이에서만 정의됩니다: {len(self.values)}"
            )
        return MultiSet(self.values[0::2]), MultiSet(self.values[1::2])

    @staticmethod
    def compress(columns, zeta):
        """여러 열을 행 단위로 lc(행, ζ) 압축한 하나의 열.

        Raises:
            ValueError: 열 길이가 서로 다를 때
        """
        lengths = {len(c) for c in columns}
        if len(lengths) > 1:
            raise ValueError(f"열 길이가 서로 다릅니다: {sorted(lengths)}")
        return MultiSet([lc(list(row), zeta) for row in zip(*columns)])
