from kivy.app import App
from kivy.clock import Clock
from kivy.config import Config
from kivy.core.window import Window
from kivy.logger import Logger
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.label import Label
from kivy.uix.screenmanager import Screen, ScreenManager
from kivy.uix.widget import Widget

from .menu_widgets import MenuScreen
from .sudoku_puzzle import SudokuPuzzle
from .sudoku_widgets import NumberPad, SudokuGrid
from .tasks import GenerationTask

Config.set('input', 'mouse', 'mouse,multitouch_on_demand')


class GameScreen(Screen):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        screen_width, screen_height = Window.size
        self.font_size = screen_height * 0.04
        self.sudoku_puzzle = None
        self.sudoku_grid = None
        self.number_pad = None
        self.task = None
        self.timer_seconds = 0
        self.clock_event = None
        self.timer_label = Label(text="00:00", font_size=self.font_size, size_hint=(None, None))
        self.back_button = Button(
            text="Main Menu",
            font_size=self.font_size,
            size_hint=(None, None),
            background_color=(0.4, 0.4, 1, 1)
        )
        self.back_button.bind(on_release=self.go_to_menu)
        Window.bind(size=self.update_layout)

    def start_game(self, difficulty):
        """
        Starts generating a puzzle in the background and shows a loading label.
        """
        self.stop_game()
        self.clear_widgets()
        self.add_widget(Label(text="Generating Sudoku...", font_size=self.font_size))
        Logger.info(f"Sudoku: generating '{difficulty}' puzzle")
        # Callbacks arrive on the worker thread; hand them to the UI thread
        task = GenerationTask(
            difficulty,
            on_done=lambda puzzle, solution: Clock.schedule_once(lambda dt: self.show_board(task, puzzle, solution)),
            on_error=lambda exc: Clock.schedule_once(lambda dt: self.show_error(task, exc)),
        )
        self.task = task.start()

    def show_board(self, task, puzzle, solution):
        # Stale result from a game that was left or replaced
        if task is not self.task:
            return
        self.task = None
        self.sudoku_puzzle = SudokuPuzzle(puzzle, solution)
        self.sudoku_grid = SudokuGrid(self.sudoku_puzzle, on_change=self.update_cell, size_hint=(None, None))
        self.number_pad = NumberPad(self.sudoku_grid, size_hint=(None, None))

        # Restart timer
        self.timer_seconds = 0
        self.timer_label.text = "00:00"
        self.clock_event = Clock.schedule_interval(self.update_timer, 1)

        self.clear_widgets()
        container = Widget()
        for widget in (self.back_button, self.timer_label, self.sudoku_grid, self.number_pad):
            if widget.parent:
                widget.parent.remove_widget(widget)
            container.add_widget(widget)
        self.add_widget(container)

        Clock.schedule_once(self.update_layout)

    def show_error(self, task, exc):
        if task is not self.task:
            return
        self.task = None
        Logger.error(f"Sudoku: generation failed: {exc}")
        layout = BoxLayout(orientation='vertical', padding=20, spacing=20)
        layout.add_widget(Label(text=f"Could not generate a puzzle.\n{exc}", font_size=self.font_size * 0.6))
        if self.back_button.parent:
            self.back_button.parent.remove_widget(self.back_button)
        layout.add_widget(self.back_button)
        self.clear_widgets()
        self.add_widget(layout)

    def update_layout(self, *args):
        """Positions the menu button, timer, grid and number pad."""
        if not self.sudoku_grid or not self.sudoku_grid.parent:
            return

        screen_width, screen_height = Window.size
        grid_size = min(screen_width * 0.75, screen_height * 0.75)

        # Grid centred horizontally
        grid_x = (screen_width - grid_size) / 2
        grid_y = screen_height * 0.2
        self.sudoku_grid.pos = (grid_x, grid_y)
        self.sudoku_grid.size = (grid_size, grid_size)
        self.sudoku_grid.update_size()

        # Number pad below the grid
        self.number_pad.pos = (grid_x, grid_y - grid_size * 0.15)
        self.number_pad.size = (grid_size, grid_size * 0.1)
        self.number_pad.update_size()

        button_height = grid_size * 0.1
        timer_width = grid_size * 0.25
        spacing = grid_size * 0.03

        self.back_button.size = (grid_size * 0.5, button_height)
        self.back_button.pos = (grid_x, grid_y + grid_size + spacing)

        self.timer_label.size = (timer_width, button_height)
        self.timer_label.pos = (grid_x + grid_size - timer_width, grid_y + grid_size + spacing)

    def update_timer(self, dt):
        self.timer_seconds += 1
        minutes = self.timer_seconds // 60
        seconds = self.timer_seconds % 60
        self.timer_label.text = f"{minutes:02}:{seconds:02}"

    def stop_game(self):
        if self.task is not None:
            self.task.cancel()
            self.task = None
        if self.clock_event:
            Clock.unschedule(self.clock_event)
            self.clock_event = None

    def go_to_menu(self, instance):
        """Returns to the main menu, cancelling a pending generation."""
        self.stop_game()
        self.clear_widgets()
        self.sudoku_grid = None
        self.manager.current = "menu"

    def update_cell(self, row, col, new_value):
        if not self.sudoku_puzzle.is_solved():
            return
        # Win: freeze the timer and show the result
        self.stop_game()
        if self.manager.has_screen("winning"):
            self.manager.remove_widget(self.manager.get_screen("winning"))
        self.manager.add_widget(WinningScreen(self.timer_label.text, name="winning"))
        self.manager.current = "winning"


class WinningScreen(Screen):
    def __init__(self, timer_text, **kwargs):
        super().__init__(**kwargs)
        layout = BoxLayout(orientation='vertical', padding=20, spacing=20)

        title = Label(text="Completed!", font_size=48)
        frozen_timer = Label(text=timer_text, font_size=32)

        btn_menu = Button(text="Main Menu", size_hint=(None, None), size=(200, 50))
        btn_menu.bind(on_release=self.go_to_menu)

        layout.add_widget(title)
        layout.add_widget(frozen_timer)
        layout.add_widget(btn_menu)
        self.add_widget(layout)

    def go_to_menu(self, instance):
        self.manager.current = "menu"


class SudokuApp(App):
    def build(self):
        sm = ScreenManager()
        sm.add_widget(MenuScreen(name="menu"))
        sm.add_widget(GameScreen(name="game"))

        sm.current = "menu"
        return sm

    def on_stop(self):
        self.root.get_screen("game").stop_game()


def run():
    SudokuApp().run()


if __name__ == '__main__':
    run()
