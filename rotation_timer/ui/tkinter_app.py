"""
Tkinter application module for the Rotation Timer.

This module contains the desktop window: game controls, configuration
buttons, the on-field and bench lists and the substitution preview. The
window's ``after`` loop is the tick source for its session.
"""
import tkinter as tk
from tkinter import ttk, simpledialog
from typing import Dict, List, Optional

from ..models import GamePhase
from ..services import GameSession, ServiceFactory
from ..services.rotation_planner import describe_plan
from ..utils import APP_TITLE, SUB_NOTIFICATION_THRESHOLD


class BannerNotifier:
    """Shows the upcoming substitution in the window banner."""

    def __init__(self, app: "SidelineApp"):
        self.app = app

    def notify_upcoming_substitution(self, players_in, players_out) -> None:
        on = ", ".join(p.name for p in players_in)
        off = ", ".join(p.name for p in players_out)
        self.app.banner_var.set(f"Sub in {SUB_NOTIFICATION_THRESHOLD} seconds!  ON: {on}  OFF: {off}")


class BellAudioCue:
    """Rings the terminal bell when a substitution happens."""

    def __init__(self, widget: tk.Misc):
        self.widget = widget

    def play_substitution_sound(self) -> None:
        self.widget.bell()


class SidelineApp(tk.Tk):
    """Main application window for the Rotation Timer."""

    def __init__(self, data_file: Optional[str] = None):
        super().__init__()
        self.title(APP_TITLE)
        self.geometry("720x560")
        self.banner_var = tk.StringVar(value="")
        self.service_factory = ServiceFactory(data_file)
        self.session: GameSession = self.service_factory.create_session(
            notifier=BannerNotifier(self),
            audio=BellAudioCue(self),
        )
        self.after_timer = None
        self._active_ids: List[int] = []
        self._reserve_ids: List[int] = []

        self._build_ui()
        self.refresh()
        self.start_auto_refresh()

    # ---------- UI Scaffolding ---------- #
    def _build_ui(self):
        header = ttk.Frame(self)
        header.pack(fill="x", padx=10, pady=5)

        self.round_label = ttk.Label(header, text="4:00", font=("Arial", 28, "bold"))
        self.round_label.pack(side="left")
        self.game_label = ttk.Label(header, text="40:00", font=("Arial", 14))
        self.game_label.pack(side="right")

        controls = ttk.Frame(self)
        controls.pack(fill="x", padx=10, pady=5)
        self.start_button = ttk.Button(controls, text="Start Game", command=self.toggle_game)
        self.start_button.pack(side="left", padx=2)
        ttk.Button(controls, text="Reset Round", command=self.reset_round).pack(side="left", padx=2)
        ttk.Button(controls, text="Reset Game", command=self.reset_game).pack(side="left", padx=2)

        config = ttk.Frame(self)
        config.pack(fill="x", padx=10, pady=5)
        self.round_button = ttk.Button(config, command=self.cycle_round)
        self.round_button.pack(side="left", padx=2)
        self.limit_button = ttk.Button(config, command=self.cycle_limit)
        self.limit_button.pack(side="left", padx=2)
        self.subs_button = ttk.Button(config, command=self.cycle_subs)
        self.subs_button.pack(side="left", padx=2)

        preview = ttk.LabelFrame(self, text="Next Substitution", padding=5)
        preview.pack(fill="x", padx=10, pady=5)
        self.on_label = ttk.Label(preview, text="ON: -")
        self.on_label.pack(anchor="w")
        self.off_label = ttk.Label(preview, text="OFF: -")
        self.off_label.pack(anchor="w")
        ttk.Label(preview, textvariable=self.banner_var, foreground="red").pack(anchor="w")

        tables = ttk.Frame(self)
        tables.pack(fill="both", expand=True, padx=10, pady=5)

        field_frame = ttk.LabelFrame(tables, text="On Field", padding=5)
        field_frame.pack(side="left", fill="both", expand=True, padx=2)
        self.active_list = tk.Listbox(field_frame)
        self.active_list.pack(fill="both", expand=True)
        self.active_list.bind("<Double-Button-1>", lambda _e: self._select_from(self.active_list, "active"))

        bench_frame = ttk.LabelFrame(tables, text="Bench", padding=5)
        bench_frame.pack(side="right", fill="both", expand=True, padx=2)
        self.reserve_list = tk.Listbox(bench_frame)
        self.reserve_list.pack(fill="both", expand=True)
        self.reserve_list.bind("<Double-Button-1>", lambda _e: self._select_from(self.reserve_list, "reserve"))

        bench_actions = ttk.Frame(bench_frame)
        bench_actions.pack(fill="x")
        ttk.Button(bench_actions, text="Sit Out", command=self.cycle_sit_out).pack(side="left", padx=2)
        ttk.Button(bench_actions, text="Exclude / Include", command=self.toggle_exclusion).pack(side="left", padx=2)
        ttk.Button(bench_actions, text="Rename…", command=self.rename_player).pack(side="left", padx=2)

    # ---------- Actions ---------- #
    def toggle_game(self):
        self.session.toggle_game()
        self.refresh()

    def reset_round(self):
        self.session.reset_round()
        self.banner_var.set("")
        self.refresh()

    def reset_game(self):
        self.session.reset_game()
        self.banner_var.set("")
        self.refresh()

    def cycle_round(self):
        self.session.cycle_round_duration()
        self.refresh()

    def cycle_limit(self):
        self.session.cycle_game_duration_limit()
        self.refresh()

    def cycle_subs(self):
        self.session.cycle_substitutions_per_round()
        self.refresh()

    def cycle_sit_out(self):
        player_id = self._selected_reserve()
        if player_id is not None:
            self.session.cycle_sit_out(player_id)
            self.refresh()

    def toggle_exclusion(self):
        player_id = self._selected_reserve()
        if player_id is not None:
            self.session.toggle_exclusion(player_id)
            self.refresh()

    def rename_player(self):
        player_id = self._selected_reserve()
        if player_id is None:
            return
        player = self.session.registry.get(player_id)
        name = simpledialog.askstring(APP_TITLE, "Player name:", initialvalue=player.name, parent=self)
        if name is not None:
            self.session.rename(player_id, name)
            self.refresh()

    def _select_from(self, listbox: tk.Listbox, role: str):
        ids = self._active_ids if role == "active" else self._reserve_ids
        selection = listbox.curselection()
        if selection:
            self.session.select_player(ids[selection[0]], role)
            self.refresh()

    def _selected_reserve(self) -> Optional[int]:
        selection = self.reserve_list.curselection()
        if not selection:
            return None
        return self._reserve_ids[selection[0]]

    # ---------- UI Updates ---------- #
    def refresh(self):
        """Redraw every widget from the session snapshot."""
        snap = self.session.snapshot()
        phase = self.session.phase

        self.round_label.config(
            text=snap["round_time_display"],
            foreground="red" if snap["warning"] else "black",
        )
        self.game_label.config(text=f"Game {snap['game_time_remaining_display']}")

        labels: Dict[GamePhase, str] = {
            GamePhase.IDLE: "Start Game",
            GamePhase.RUNNING: "Pause",
            GamePhase.PAUSED: "Resume",
            GamePhase.ENDED: "Full Time",
        }
        self.start_button.config(text=labels[phase])
        self.round_button.config(text=f"Round {snap['round_minutes']}m")
        self.limit_button.config(text=f"Game {snap['game_limit_minutes']}m")
        self.subs_button.config(text=f"Subs {snap['state']['substitutions_per_round']}")

        if snap["show_preview"]:
            on, off = describe_plan(self.session.plan)
            self.on_label.config(text=f"ON: {on}")
            self.off_label.config(text=f"OFF: {off}")
        else:
            self.on_label.config(text="ON: -")
            self.off_label.config(text="OFF: -")
            if phase is not GamePhase.RUNNING:
                self.banner_var.set("")

        self.active_list.delete(0, tk.END)
        self.reserve_list.delete(0, tk.END)
        self._active_ids, self._reserve_ids = [], []
        for player in snap["players"]:
            line = f"{player['name']}  {player['play_time_display']}"
            if player["role"] == "active":
                self._active_ids.append(player["id"])
                self.active_list.insert(tk.END, line)
                continue
            if player["excluded"]:
                line += "  (excluded)"
            elif player["sit_out_rounds"]:
                line += f"  sit {player['sit_out_minutes']}m"
            if player["just_subbed"]:
                line += "  ↓"
            self._reserve_ids.append(player["id"])
            self.reserve_list.insert(tk.END, line)

    def start_auto_refresh(self):
        """Start the one-second tick/refresh loop."""
        if self.after_timer:
            self.after_cancel(self.after_timer)
        self.after_timer = self.after(1000, self._auto_refresh_tick)

    def _auto_refresh_tick(self):
        self.session.catch_up()
        self.refresh()
        self.start_auto_refresh()


def create_tkinter_app(data_file: Optional[str] = None) -> SidelineApp:
    """Create the desktop window."""
    return SidelineApp(data_file)


def run_tkinter_app(data_file: Optional[str] = None) -> None:
    """Create the desktop window and enter the Tk main loop."""
    app = create_tkinter_app(data_file)
    app.mainloop()
