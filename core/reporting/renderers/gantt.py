from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.dates as mdates
import matplotlib.pyplot as plt
from matplotlib import ticker
from matplotlib.dates import date2num

from core.services.roadmap.projector import EpicTimeline


class RoadmapTimelineRenderer:
    def render(
        self,
        timelines: List[EpicTimeline],
        output_path: Path,
        today: Optional[datetime] = None,
    ) -> Path:
        bars = [t for t in timelines if t.estimated_start and t.estimated_end]
        if not bars:
            raise ValueError("No epics with dates available for roadmap timeline")

        bars.sort(key=lambda t: (t.estimated_start, t.estimated_end))

        names = [t.title for t in bars]
        start_nums = [date2num(t.estimated_start) for t in bars]
        widths = [date2num(t.estimated_end) - date2num(t.estimated_start) for t in bars]
        progress = [
            (t.completed_stories / t.story_count) if t.story_count else 0.0
            for t in bars
        ]

        fig, ax = plt.subplots(figsize=(12, max(3, 0.5 * len(bars) + 1)))

        for i, (s, w, p) in enumerate(zip(start_nums, widths, progress)):
            ax.barh(i, w, left=s, height=0.4, color="#d0d0ff", edgecolor="black", linewidth=0.6)
            if p > 0:
                ax.barh(i, w * p, left=s, height=0.4, color="#8080ff")

        ax.set_yticks(range(len(names)))
        ax.set_yticklabels(names, fontsize=9)
        ax.invert_yaxis()

        locator = mdates.AutoDateLocator(minticks=4, maxticks=10)
        ax.xaxis.set_major_locator(locator)
        ax.xaxis.set_major_formatter(mdates.ConciseDateFormatter(locator))
        ax.xaxis.set_minor_locator(ticker.NullLocator())

        today = today or datetime.now(timezone.utc)
        ax.axvline(date2num(today), color="red", linestyle="--", linewidth=1)

        ax.set_title("Project Roadmap")
        ax.grid(True, axis="x", linestyle=":", linewidth=0.5)

        fig.tight_layout()
        fig.savefig(output_path, dpi=150)
        plt.close(fig)

        return output_path
