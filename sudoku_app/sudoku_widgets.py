from kivy.graphics import Color, Line
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.gridlayout import GridLayout

from .constraints import SIZE, BOX

SELECTED_COLOR = (1, 0.85, 0.2, 1)
RELATED_COLOR = (1, 0.95, 0.7, 1)
CELL_COLOR = (1, 1, 1, 1)
GIVEN_TEXT = (0, 0, 0, 1)
PLAYER_TEXT = (0.15, 0.3, 0.85, 1)
WRONG_TEXT = (0.85, 0.1, 0.1, 1)


class SudokuGrid(GridLayout):
    """
    9x9 board of buttons. Tapping a cell selects it and highlights its row,
    column and box; values are written through enter_value().
    """

    def __init__(self, puzzle, on_change=None, **kwargs):
        super().__init__(cols=SIZE, rows=SIZE, **kwargs)
        self.puzzle = puzzle
        self.on_change = on_change
        self.selected = None
        self.cells = {}
        for row in range(SIZE):
            for col in range(SIZE):
                cell = Button(
                    background_normal="",
                    background_color=CELL_COLOR,
                    color=GIVEN_TEXT,
                    bold=puzzle.is_given(row, col),
                )
                cell.bind(on_release=lambda _btn, r=row, c=col: self.select(r, c))
                self.cells[(row, col)] = cell
                self.add_widget(cell)
        self.bind(pos=self._draw_separators, size=self._draw_separators)
        self.refresh()

    def _draw_separators(self, *args):
        # Bold lines between each 3x3 box
        self.canvas.after.clear()
        step_x = self.width / SIZE
        step_y = self.height / SIZE
        with self.canvas.after:
            Color(0, 0, 0, 1)
            for i in range(0, SIZE + 1, BOX):
                Line(points=[self.x + i * step_x, self.y, self.x + i * step_x, self.top], width=2)
                Line(points=[self.x, self.y + i * step_y, self.right, self.y + i * step_y], width=2)

    def update_size(self):
        for cell in self.cells.values():
            cell.font_size = self.height / SIZE * 0.6

    def select(self, row, col):
        self.selected = (row, col)
        self.refresh()

    def enter_value(self, value):
        if self.selected is None or self.puzzle.is_given(*self.selected):
            return
        row, col = self.selected
        self.puzzle.set_value(row, col, value)
        self.refresh()
        if self.on_change:
            self.on_change(row, col, value)

    def refresh(self):
        related = self.puzzle.related_cells(*self.selected) if self.selected else set()
        wrong = set(self.puzzle.wrong_cells())
        for (row, col), cell in self.cells.items():
            value = self.puzzle.board[row][col]
            cell.text = str(value) if value else ""
            if (row, col) == self.selected:
                cell.background_color = SELECTED_COLOR
            elif (row, col) in related:
                cell.background_color = RELATED_COLOR
            else:
                cell.background_color = CELL_COLOR
            if self.puzzle.is_given(row, col):
                cell.color = GIVEN_TEXT
            else:
                cell.color = WRONG_TEXT if (row, col) in wrong else PLAYER_TEXT


class NumberPad(BoxLayout):
    """Digits 1-9 plus an erase key, writing into the grid's selected cell."""

    def __init__(self, sudoku_grid, **kwargs):
        super().__init__(orientation="horizontal", spacing=4, **kwargs)
        self.sudoku_grid = sudoku_grid
        self.buttons = []
        for value in list(range(1, SIZE + 1)) + [0]:
            btn = Button(
                text=str(value) if value else "X",
                background_normal="",
                background_color=(0.5, 0.5, 1, 1),
            )
            btn.bind(on_release=lambda _btn, v=value: self.sudoku_grid.enter_value(v))
            self.buttons.append(btn)
            self.add_widget(btn)

    def update_size(self):
        for btn in self.buttons:
            btn.font_size = self.height * 0.6
