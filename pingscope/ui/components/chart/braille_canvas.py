BRAILLE_BASE = 0x2800

# Dot bit for (sub_row, sub_column) inside one 2x4 braille cell.
BRAILLE_DOT_MAP: tuple[tuple[int, int], ...] = (
    (0b00000001, 0b00001000),
    (0b00000010, 0b00010000),
    (0b00000100, 0b00100000),
    (0b01000000, 0b10000000),
)

DOT_COLUMNS_PER_CELL = 2
DOT_ROWS_PER_CELL = 4


class BrailleCanvas:
    """
    Flat arena of (dot mask, colour) cells addressed in dot space.

    A canvas of ``columns`` x ``rows`` character cells exposes
    ``columns * 2`` horizontal and ``rows * 4`` vertical dot positions.
    """

    __slots__ = (
        "columns",
        "rows",
        "dot_width",
        "dot_height",
        "_masks",
        "_colors",
    )

    def __init__(
        self,
        columns: int,
        rows: int,
    ) -> None:
        self.columns = columns
        self.rows = rows
        self.dot_width = columns * DOT_COLUMNS_PER_CELL
        self.dot_height = rows * DOT_ROWS_PER_CELL

        self._masks: list[int] = [0] * (columns * rows)
        self._colors: list[str | None] = [None] * (columns * rows)

    def set_dot(
        self,
        x: int,
        y: int,
        color: str,
    ):
        if x < 0 or x >= self.dot_width or y < 0 or y >= self.dot_height:
            return

        cell_idx = (y // DOT_ROWS_PER_CELL) * self.columns + x // DOT_COLUMNS_PER_CELL

        self._masks[cell_idx] |= BRAILLE_DOT_MAP[y % DOT_ROWS_PER_CELL][
            x % DOT_COLUMNS_PER_CELL
        ]
        self._colors[cell_idx] = color

    def draw_line(
        self,
        x1: int,
        y1: int,
        x2: int,
        y2: int,
        color: str,
    ):
        """Integer Bresenham from (x1, y1) to (x2, y2), both ends inclusive."""
        dx = abs(x2 - x1)
        dy = abs(y2 - y1)
        sx = 1 if x1 < x2 else -1
        sy = 1 if y1 < y2 else -1
        err = dx - dy

        x, y = x1, y1

        while True:
            self.set_dot(x, y, color)

            if x == x2 and y == y2:
                break

            e2 = 2 * err
            if e2 > -dy:
                err -= dy
                x += sx

            if e2 < dx:
                err += dx
                y += sy

    def cell(
        self,
        column: int,
        row: int,
    ) -> tuple[int, str | None]:
        cell_idx = row * self.columns + column
        return self._masks[cell_idx], self._colors[cell_idx]

    def is_set(
        self,
        x: int,
        y: int,
    ) -> bool:
        mask, _ = self.cell(x // DOT_COLUMNS_PER_CELL, y // DOT_ROWS_PER_CELL)
        return (
            mask
            & BRAILLE_DOT_MAP[y % DOT_ROWS_PER_CELL][x % DOT_COLUMNS_PER_CELL]
        ) != 0

    def render_row(self, row: int) -> str:
        cells: list[str] = []

        for column in range(self.columns):
            mask, color = self.cell(column, row)

            if mask == 0:
                cells.append(" ")

            else:
                cells.append(f"[{color}]{chr(BRAILLE_BASE + mask)}[white]")

        return "".join(cells)
