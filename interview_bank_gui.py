"""interview_bank_gui.py — Tkinter front end for the interview question bank.

Everything here is presentation: widgets, dialogs and event wiring.  All
decisions about what to show come from the AppController in interview_bank.py;
after every command the view re-renders from the dict the controller returns.

To replace Tkinter with a different frontend: rewrite this module and leave
interview_bank.py unchanged.
"""

import logging
import tkinter as tk

from interview_bank import AppController, BankLoadError, LOAD_FAILED_TEXT


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level=logging.INFO):
    """Attach a stream handler to the root logger unless one is already set up."""
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


# ══════════════════════════════════════════════════════════════════════════════
# VIEW LAYER  (Tkinter GUI)
# ══════════════════════════════════════════════════════════════════════════════

class TkView:
    """Tkinter view layer.

    Responsibilities:
      - Build the main card screen, the search dialog and the favorites dialog
      - Translate clicks and keystrokes into controller calls
      - Render whatever state dict the controller hands back

    This class must NOT contain business rules.  If you find yourself writing
    an 'if' that checks data validity (not widget state), move it to the
    controller.
    """

    def __init__(self, root, controller=None):
        self.root = root
        self.root.title("面试题库")
        self.root.geometry("640x560")
        self.root.minsize(420, 420)

        # The controller is the only object the view talks to directly.
        self.ctrl = controller or AppController()

        self._search_win    = None
        self._favorites_win = None

        self.container = tk.Frame(root)
        self.container.pack(fill=tk.BOTH, expand=True)
        self._build_main_view()

        self.root.bind("<Escape>", lambda e: self._close_dialogs())

        try:
            state = self.ctrl.load_bank_file()
        except BankLoadError:
            # Terminal: no retry and no partial bank.
            logger.exception("Question bank failed to load")
            self._show_load_failure()
            return
        self._render(state)

    # ── Main view ─────────────────────────────────────────────────────────────

    def _build_main_view(self):
        top_bar = tk.Frame(self.container)
        top_bar.pack(fill=tk.X, padx=8, pady=(6, 0))

        # School menu.  Rebuilt on every render because the active entry moves.
        self._school_var  = tk.StringVar(value="")
        self._school_menu = tk.Menubutton(
            top_bar, text="学校", relief=tk.RAISED, font=("Arial", 11)
        )
        self._school_menu.menu = tk.Menu(self._school_menu, tearoff=0)
        self._school_menu["menu"] = self._school_menu.menu
        self._school_menu.pack(side=tk.LEFT)

        tk.Button(top_bar, text="搜索", command=self._open_search, width=8).pack(side=tk.RIGHT, padx=4)

        self._title_label = tk.Label(self.container, text="", font=("Arial", 20, "bold"))
        self._title_label.pack(pady=(16, 4))

        metrics = tk.Frame(self.container)
        metrics.pack()
        self._count_label = tk.Label(metrics, text="", font=("Arial", 11))
        self._count_label.pack(side=tk.LEFT, padx=10)
        # The favorite count doubles as the button that opens the favorites list.
        self._fav_count_btn = tk.Button(
            metrics, text="", font=("Arial", 11), command=self._open_favorites,
            bd=0, relief=tk.FLAT, cursor="hand2",
        )
        self._fav_count_btn.pack(side=tk.LEFT, padx=10)

        # Grooved frame acts as the visual "card face".
        card = tk.Frame(self.container, bd=2, relief=tk.GROOVE)
        card.pack(fill=tk.BOTH, expand=True, padx=30, pady=12)

        header = tk.Frame(card)
        header.pack(fill=tk.X, padx=12, pady=(8, 0))
        self._progress_label = tk.Label(header, text="", font=("Arial", 10), fg="gray")
        self._progress_label.pack(side=tk.LEFT)
        self._badge_label = tk.Label(header, text="★", font=("Arial", 12), fg="gray")
        self._badge_label.pack(side=tk.RIGHT)

        self._question_label = tk.Label(
            card, text="", font=("Arial", 15, "bold"), wraplength=520, justify=tk.LEFT
        )
        self._question_label.pack(fill=tk.X, padx=16, pady=(12, 8))

        self._answer_label = tk.Label(
            card, text="", font=("Arial", 12), wraplength=520, justify=tk.LEFT
        )
        self._answer_label.pack(fill=tk.BOTH, expand=True, padx=16, pady=(0, 12))

        nav = tk.Frame(self.container)
        nav.pack(pady=(0, 18))
        tk.Button(nav, text="上一题", command=self._on_prev, width=10).pack(side=tk.LEFT, padx=5)
        self._fav_btn = tk.Button(nav, text="收藏", command=self._on_toggle_favorite, width=10)
        self._fav_btn.pack(side=tk.LEFT, padx=5)
        tk.Button(nav, text="下一题", command=self._on_next, width=10).pack(side=tk.LEFT, padx=5)

        self.root.bind("<Left>",  lambda e: self._on_prev())
        self.root.bind("<Right>", lambda e: self._on_next())

    def _show_load_failure(self):
        self._question_label.config(text=LOAD_FAILED_TEXT)
        self._answer_label.config(text="")
        self._progress_label.config(text="")

    def _render(self, state):
        """Update every main-view widget from a controller state dict."""
        self._title_label.config(text=state["title"])
        self._count_label.config(
            text=f"题目 {state['question_count'] if state['question_count'] else '—'}"
        )
        self._fav_count_btn.config(text=f"收藏 {state['favorite_count']}")

        self._progress_label.config(text=state["position"])
        self._question_label.config(text=state["question"])
        self._answer_label.config(text=state["answer"])

        fav = state["is_favorite"]
        self._badge_label.config(fg="orange" if fav else "gray")
        self._fav_btn.config(text="已收藏" if fav else "收藏", relief=tk.SUNKEN if fav else tk.RAISED)

        self._render_school_menu(state["schools"])

    def _render_school_menu(self, schools):
        menu = self._school_menu.menu
        menu.delete(0, tk.END)
        for school in schools:
            if school["active"]:
                self._school_var.set(school["id"])
                self._school_menu.config(text=school["label"])
            menu.add_radiobutton(
                label=school["label"],
                variable=self._school_var,
                value=school["id"],
                command=lambda sid=school["id"]: self._on_select_school(sid),
            )

    # ── Main view event handlers ──────────────────────────────────────────────
    # Each handler calls exactly one controller method and renders the result.

    def _on_prev(self):
        self._render(self.ctrl.prev_question())

    def _on_next(self):
        self._render(self.ctrl.next_question())

    def _on_toggle_favorite(self):
        self._render(self.ctrl.toggle_favorite())

    def _on_select_school(self, school_id):
        self._render(self.ctrl.select_school(school_id))

    # ── Dialog helpers ────────────────────────────────────────────────────────

    def _make_dialog(self, title):
        win = tk.Toplevel(self.root)
        win.title(title)
        win.geometry("520x420")
        win.transient(self.root)
        win.bind("<Escape>", lambda e: win.destroy())
        return win

    def _make_result_list(self, parent):
        """Pack a scrollable listbox into parent and return it."""
        frame = tk.Frame(parent)
        frame.pack(fill=tk.BOTH, expand=True, padx=12, pady=(6, 6))
        scrollbar = tk.Scrollbar(frame)
        scrollbar.pack(side=tk.RIGHT, fill=tk.Y)
        listbox = tk.Listbox(frame, font=("Arial", 12), yscrollcommand=scrollbar.set)
        listbox.pack(fill=tk.BOTH, expand=True)
        scrollbar.config(command=listbox.yview)
        return listbox

    def _fill_result_list(self, listbox, result):
        """Show result["rows"] (or its placeholder row).

        Returns the list of clickable rows, parallel to the listbox lines.
        Placeholder lines map to None.
        """
        listbox.delete(0, tk.END)
        entries = []
        if result["empty_row"]:
            row = result["empty_row"]
            listbox.insert(tk.END, f"{row['title']}  ({row['meta']})")
            listbox.itemconfigure(0, fg="gray")
            entries.append(None)
        for row in result["rows"]:
            listbox.insert(tk.END, f"{row['title']}  ·  {row['meta']}")
            entries.append(row)
        return entries

    def _close_dialogs(self):
        for win in (self._search_win, self._favorites_win):
            if win is not None and win.winfo_exists():
                win.destroy()

    # ── Search dialog ─────────────────────────────────────────────────────────

    def _open_search(self):
        if self._search_win is not None and self._search_win.winfo_exists():
            self._search_win.lift()
            return

        win = self._make_dialog("搜索")
        self._search_win = win

        self._search_var = tk.StringVar(value="")
        entry = tk.Entry(win, textvariable=self._search_var, font=("Arial", 13))
        entry.pack(fill=tk.X, padx=12, pady=(12, 0))

        self._search_list = self._make_result_list(win)
        self._search_rows = []
        self._search_list.bind("<Double-Button-1>", lambda e: self._on_search_pick())
        self._search_list.bind("<Return>",          lambda e: self._on_search_pick())

        # Re-run the search on every keystroke.
        self._search_var.trace_add("write", lambda *args: self._on_search_input())

        tk.Button(win, text="关闭", command=win.destroy, width=10).pack(pady=(0, 12))
        # Focus after the window is mapped, or some window managers drop it.
        win.after(50, entry.focus_set)

    def _on_search_input(self):
        keyword = self._search_var.get()
        result  = self.ctrl.get_search_results(keyword)
        self._search_rows = self._fill_result_list(self._search_list, result)

    def _on_search_pick(self):
        sel = self._search_list.curselection()
        if not sel:
            return
        row = self._search_rows[sel[0]]
        if row is None:
            return  # Placeholder line.
        self._render(self.ctrl.open_search_result(row["school_id"], row["index"]))
        self._search_win.destroy()

    # ── Favorites dialog ──────────────────────────────────────────────────────

    def _open_favorites(self):
        if self._favorites_win is not None and self._favorites_win.winfo_exists():
            self._favorites_win.destroy()

        win = self._make_dialog("收藏")
        self._favorites_win = win

        result = self.ctrl.get_favorites_view()
        tk.Label(win, text=result["header"], font=("Arial", 12, "bold")).pack(pady=(12, 0))

        self._favorites_list = self._make_result_list(win)
        self._favorite_rows  = self._fill_result_list(self._favorites_list, result)
        self._favorites_list.bind("<Double-Button-1>", lambda e: self._on_favorite_pick())
        self._favorites_list.bind("<Return>",          lambda e: self._on_favorite_pick())

        tk.Button(win, text="关闭", command=win.destroy, width=10).pack(pady=(0, 12))

    def _on_favorite_pick(self):
        sel = self._favorites_list.curselection()
        if not sel:
            return
        row = self._favorite_rows[sel[0]]
        if row is None:
            return
        self._render(self.ctrl.open_favorite(row["index"]))
        self._favorites_win.destroy()


def main():
    configure_logging()
    root = tk.Tk()
    TkView(root)
    root.mainloop()


if __name__ == "__main__":
    main()
