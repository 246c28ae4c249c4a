"""Console output for processing results."""

from pathlib import Path

from models import FileResult, ProcessingStats


class ConsoleReporter:
    """Prints per-file results and run summaries."""

    COLORS = {
        "reset": "\033[0m",
        "bold": "\033[1m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "red": "\033[91m",
        "cyan": "\033[96m",
        "dim": "\033[2m",
    }

    def __init__(self, no_color: bool = False, quiet: bool = False):
        """
        Initialize reporter.

        Args:
            no_color: Disable colored output
            quiet: Suppress per-file output
        """
        self.no_color = no_color
        self.quiet = quiet

        if no_color:
            self.COLORS = {k: "" for k in self.COLORS}

    def _c(self, color: str, text: str) -> str:
        """Apply color to text."""
        return f"{self.COLORS.get(color, '')}{text}{self.COLORS['reset']}"

    def print(self, *args, **kwargs):
        """Print unless quiet mode."""
        if not self.quiet:
            print(*args, **kwargs)

    def show_file_result(self, result: FileResult) -> None:
        """Display the outcome and resulting frames for a file."""
        if self.quiet:
            return

        header = self._c("bold", result.file_path)
        if result.renamed:
            header += f" -> {self._c('green', Path(result.final_path).name)}"
        print(header)

        if result.error:
            print(f"  {self._c('red', 'Error:')} {result.error}")
            return

        if result.changed_fields:
            label = "Updated" if result.tags_written else "Would update"
            print(f"  {self._c('yellow', label + ':')} {', '.join(result.changed_fields)}")

        if not result.frames:
            print(f"  {self._c('dim', '(no frames)')}")
        for frame_id, value in result.frames.items():
            print(f"  {self._c('cyan', frame_id)}: {value}")

    def show_extracted_cover(self, source: str, target: str, size: int) -> None:
        """Report a cover written to disk."""
        self.print(f"Extracted cover from {Path(source).name} to {target} ({size} bytes)")

    def show_summary(self, stats: ProcessingStats) -> None:
        """Display final processing summary."""
        if self.quiet and not stats.errors:
            return

        print(f"\n{self._c('bold', '=' * 60)}")
        print(f"{self._c('bold', 'Processing Summary')}")
        print("=" * 60)

        print(f"Files processed:     {stats.files_processed}")
        print(f"Tags updated:        {self._c('green', str(stats.tags_updated))}")
        print(f"Files renamed:       {stats.files_renamed}")
        print(f"Files skipped:       {stats.files_skipped}")

        if stats.errors:
            print(f"\n{self._c('red', 'Errors:')}")
            for error in stats.errors[:10]:  # Limit displayed errors
                print(f"  - {error}")
            if len(stats.errors) > 10:
                print(f"  ... and {len(stats.errors) - 10} more errors")
