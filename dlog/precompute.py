"""
Fixed-base windowed exponentiation tables.
"""

from exactint.exceptions import InvalidArgument


class PrecomputedExponentTable:
    """
    Powers of one base, arranged by window.

    rows[i][j] holds base ** (j * 2 ** (window * i)) for 0 <= j < 2 ** window,
    so an exponent is evaluated with one multiplication per non-zero window
    digit and no squarings. Rows are added lazily as longer exponents show up.
    """

    def __init__(self, group, base, window=4):
        self.group = group
        self.base = base
        self.window = window
        self.rows = []
        self._next_row_base = base

    def _extend(self, num_rows):
        multiply = self.group.multiply_group_elements
        while len(self.rows) < num_rows:
            row_base = self._next_row_base
            row = [self.group.get_identity(), row_base]
            for _ in range(2, 1 << self.window):
                row.append(multiply(row[-1], row_base))
            self.rows.append(row)
            self._next_row_base = multiply(row[-1], row_base)

    def power(self, exponent):
        if exponent < 0:
            raise InvalidArgument("exponent must be reduced to a non-negative value")
        num_rows = (exponent.bit_length() + self.window - 1) // self.window
        self._extend(num_rows)

        mask = (1 << self.window) - 1
        result = self.group.get_identity()
        for index in range(num_rows):
            digit = (exponent >> (index * self.window)) & mask
            if digit:
                result = self.group.multiply_group_elements(result, self.rows[index][digit])
        return result
