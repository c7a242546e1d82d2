from kivy.core.window import Window
from kivy.uix.button import Button
from kivy.uix.floatlayout import FloatLayout
from kivy.uix.label import Label
from kivy.uix.screenmanager import Screen

from .difficulty import labels


class MenuScreen(Screen):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.layout = FloatLayout()
        self.add_widget(self.layout)

        # Rebuild on resize
        Window.bind(on_resize=self.update_positions)

        self.create_buttons()

    def create_buttons(self):
        """Creates one button per difficulty, positioned relative to the window."""
        self.layout.clear_widgets()

        screen_width, screen_height = Window.size
        button_width = screen_width * (2 / 5)
        button_height = screen_height * 0.1
        spacing = screen_height * 0.02  # Vertical gap between buttons

        title = Label(
            text="Sudoku",
            font_size=screen_height * 0.08,
            size_hint=(None, None),
            size=(screen_width, screen_height * 0.15),
            pos=(0, screen_height * 0.78),
        )
        self.layout.add_widget(title)

        for i, difficulty in enumerate(labels()):
            btn = Button(
                text=difficulty.capitalize(),
                font_size=button_height * 0.4,
                color=(1, 1, 1, 1),
                background_normal="",
                background_disabled_normal="",
                background_color=(0.5, 0.5, 1, 1),
                size_hint=(None, None),
                size=(button_width, button_height),
                pos=(
                    (screen_width - button_width) / 2,
                    screen_height * 0.6 - (i * (button_height + spacing))
                )
            )
            btn.bind(on_release=self.on_difficulty_selected)
            self.layout.add_widget(btn)

    def update_positions(self, *args):
        self.create_buttons()

    def on_difficulty_selected(self, button):
        """
        Starts a game at the chosen difficulty and switches to the board screen.
        """
        selected_difficulty = button.text.lower()
        self.manager.get_screen("game").start_game(selected_difficulty)
        self.manager.current = "game"
