# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .schemas import PredictionResult

ASCII_BANNER = r"""
 _____         _      ____ _               _  __
|_   _|____  _| |_   / ___| | __ _ ___ ___(_)/ _|_   _
  | |/ _ \ \/ / __| | |   | |/ _` / __/ __| | |_| | | |
  | |  __/>  <| |_  | |___| | (_| \__ \__ \ |  _| |_| |
  |_|\___/_/\_\\__|  \____|_|\__,_|___/___/_|_|  \__, |
                                                 |___/
"""

# Metrics whose value is not a ratio and is printed as a plain number.
RAW_METRICS = {"LogLoss", "LogLossReduction"}


def format_metric(name: str, value: float) -> str:
    if name in RAW_METRICS:
        return f"{float(value):.4f}"
    return f"{float(value):.2%}"


@dataclass
class MLConsole:
    enabled: bool = True
    color: bool = True

    def __post_init__(self) -> None:
        self._console = Console(color_system="auto" if self.color else None, soft_wrap=True) if self.enabled else None

    def banner(self) -> None:
        if self._console:
            self._console.print(Panel.fit(ASCII_BANNER.strip("\n"), title="Text Classify", border_style="cyan"))
            return
        print(ASCII_BANNER)

    def section(self, title: str) -> None:
        line = f"========== {title} =========="
        if self._console:
            self._console.print(f"[bold magenta]{line}[/bold magenta]")
        else:
            print(line)

    def info(self, text: str) -> None:
        if self._console:
            self._console.print(f"[bold cyan]INFO[/bold cyan] {escape(text)}")
        else:
            print(f"[INFO] {text}")

    def warn(self, text: str) -> None:
        if self._console:
            self._console.print(f"[bold yellow]WARN[/bold yellow] {escape(text)}")
        else:
            print(f"[WARN] {text}")

    def success(self, text: str) -> None:
        if self._console:
            self._console.print(f"[bold green]OK[/bold green] {escape(text)}")
        else:
            print(f"[OK] {text}")

    def error(self, text: str) -> None:
        if self._console:
            self._console.print(f"[bold red]ERROR[/bold red] {escape(text)}")
        else:
            print(f"[ERROR] {text}")

    def metrics_table(self, metrics: Mapping[str, float], *, title: str) -> None:
        if self._console:
            table = Table(title=title, show_lines=True)
            table.add_column("Metric", style="bold")
            table.add_column("Value", justify="right")
            for key, value in metrics.items():
                table.add_row(key, format_metric(key, value))
            self._console.print(table)
            return

        print(title)
        print("-" * len(title))
        for key, value in metrics.items():
            print(f"{key}: {format_metric(key, value)}")

    def predictions_table(self, results: Iterable[PredictionResult], *, title: str = "Predictions") -> None:
        rows = list(results)
        if self._console:
            table = Table(title=title, show_lines=True)
            table.add_column("Text", overflow="fold")
            table.add_column("Prediction", style="bold")
            table.add_column("Probability", justify="right")
            for result in rows:
                table.add_row(escape(result.summary), escape(result.label_text), f"{result.probability:.4f}")
            self._console.print(table)
            return

        print(title)
        for result in rows:
            print(f"Text: {result.summary} | Prediction: {result.label_text} | Probability: {result.probability:.4f}")
