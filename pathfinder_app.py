"""
Grid Path Finder GUI with Tkinter

Features:
- Click cells to place a start, an end and obstacles.
- "Generate Maze" rebuilds the grid and scatters obstacles over it.
- "Find Path" runs BFS from start to end and paints the shortest route.
- Messages from the path finder are shown in a status line.
- --headless prints a generated, solved grid as text instead of opening a window.

Run:
    python pathfinder_app.py                      # run the GUI
    python pathfinder_app.py --headless --seed 7  # text mode
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import Dict, List, Optional, Sequence

import tkinter as tk

from grid_graph import (
    GRID_HEIGHT,
    GRID_WIDTH,
    CellType,
    GridGraph,
    render_ascii,
)

logger = logging.getLogger(__name__)

MODE_START = "Start"
MODE_END = "End"
MODE_OBSTACLE = "Obstacle"

MODE_KINDS: Dict[str, CellType] = {
    MODE_START: CellType.START,
    MODE_END: CellType.END,
    MODE_OBSTACLE: CellType.OBSTACLE,
}


class PathFinderApp:
    """Tkinter front end: a button panel on the left, the grid on the right."""

    PANEL_WIDTH = 220
    CANVAS_MARGIN = 8
    BACKGROUND = "#2D2727"
    BUTTON_COLOR = "#B8BDB5"
    SELECTED_COLOR = "#FFF034"

    COLORS = {
        CellType.EMPTY: "#B8BDB5",
        CellType.OBSTACLE: "#12130F",
        CellType.START: "#00FF00",
        CellType.END: "#FF0000",
        CellType.PATH: "#F8FF1C",
    }

    def __init__(self, root: tk.Tk, graph: GridGraph, cell_size: int = 30,
                 rng: Optional[random.Random] = None) -> None:
        self.root = root
        self.root.title("Grid Path Finder")
        self.root.configure(bg=self.BACKGROUND)

        self.graph = graph
        self.graph.notify = self.show_message
        self.cell_px = cell_size
        self.rng = rng
        self.mode: Optional[str] = None

        panel = tk.Frame(self.root, width=self.PANEL_WIDTH, bg=self.BACKGROUND)
        panel.pack(side=tk.LEFT, fill=tk.Y, padx=10, pady=10)
        panel.pack_propagate(False)

        self.buttons: Dict[str, tk.Button] = {}
        for name in (MODE_START, MODE_END, MODE_OBSTACLE):
            self.buttons[name] = self._add_button(panel, name, lambda n=name: self.select_mode(n))
        self._add_button(panel, "Find Path", self.on_find_path)
        self._add_button(panel, "Generate Maze", self.on_generate_maze)
        self._add_button(panel, "Exit", self.root.destroy)

        self.status_var = tk.StringVar(value="Pick a mode, then click on the grid.")
        tk.Label(panel, textvariable=self.status_var, wraplength=self.PANEL_WIDTH - 10,
                 justify=tk.LEFT, fg="white", bg=self.BACKGROUND).pack(anchor="w", pady=(20, 0))

        m = self.CANVAS_MARGIN
        self.canvas = tk.Canvas(
            self.root,
            width=graph.width * cell_size + 2 * m,
            height=graph.height * cell_size + 2 * m,
            bg=self.BACKGROUND,
            highlightthickness=0,
        )
        self.canvas.pack(side=tk.RIGHT, padx=10, pady=10)
        self.canvas.bind("<Button-1>", self.on_canvas_click)

        self._draw_grid()

    def _add_button(self, panel: tk.Frame, text: str, command) -> tk.Button:
        btn = tk.Button(panel, text=text, command=command, bg=self.BUTTON_COLOR,
                        activebackground=self.SELECTED_COLOR, font=("Arial", 14))
        btn.pack(anchor="w", pady=(0, 10), fill=tk.X)
        return btn

    def select_mode(self, mode: Optional[str]) -> None:
        self.mode = mode
        for name, btn in self.buttons.items():
            btn.configure(bg=self.SELECTED_COLOR if name == mode else self.BUTTON_COLOR)

    def show_message(self, message: str) -> None:
        logger.info(message)
        self.status_var.set(message)

    def on_canvas_click(self, event: tk.Event) -> None:  # type: ignore[name-defined]
        if self.mode is None:
            return
        m = self.CANVAS_MARGIN
        x = int((event.x - m) // self.cell_px)
        y = int((event.y - m) // self.cell_px)
        if not self.graph.in_bounds(x, y):
            return
        if self.graph.mark_cell(x, y, MODE_KINDS[self.mode]):
            self._draw_grid()

    def on_find_path(self) -> None:
        path = self.graph.find_shortest_path()
        if path:
            self.show_message(f"Shortest path: {len(path) - 1} steps.")
        self._draw_grid()

    def on_generate_maze(self) -> None:
        self.graph.build_graph()
        self.graph.generate_maze(self.rng)
        self.select_mode(None)
        self.show_message("Maze generated. You can now set start and end points.")
        self._draw_grid()

    def _draw_grid(self) -> None:
        self.canvas.delete("all")
        size = self.cell_px
        m = self.CANVAS_MARGIN
        for cell in self.graph:
            x0, y0 = m + cell.x * size, m + cell.y * size
            self.canvas.create_rectangle(
                x0, y0, x0 + size, y0 + size,
                fill=self.COLORS[cell.kind], outline="black", width=2,
            )


def run_headless(graph: GridGraph, rng: Optional[random.Random]) -> str:
    """Generate a maze, put start/end on the first/last open cells and solve it."""
    graph.build_graph()
    graph.generate_maze(rng)
    open_cells = [c.pos for c in graph if c.kind == CellType.EMPTY]
    if len(open_cells) >= 2:
        graph.mark_cell(*open_cells[0], CellType.START)
        graph.mark_cell(*open_cells[-1], CellType.END)
    graph.find_shortest_path()
    return render_ascii(graph)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive BFS shortest path on a grid")
    parser.add_argument("--width", type=int, default=GRID_WIDTH, help="grid width in cells")
    parser.add_argument("--height", type=int, default=GRID_HEIGHT, help="grid height in cells")
    parser.add_argument("--cell-size", type=int, default=30, help="cell size in pixels")
    parser.add_argument("--seed", type=int, default=None, help="seed for maze generation")
    parser.add_argument("--headless", action="store_true", help="print a solved maze and exit")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)
    if args.width <= 0 or args.height <= 0 or args.cell_size <= 0:
        parser.error("--width, --height and --cell-size must be positive")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    rng = random.Random(args.seed) if args.seed is not None else None
    graph = GridGraph(args.width, args.height)

    if args.headless:
        sys.stdout.write(run_headless(graph, rng))
        return 0

    try:
        root = tk.Tk()
    except tk.TclError as e:
        logger.error("Cannot open a window: %s", e)
        return 1
    PathFinderApp(root, graph, cell_size=args.cell_size, rng=rng)
    root.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
