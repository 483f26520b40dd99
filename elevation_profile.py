"""
Display and export elevation profiles for GPX tracks.

This script loads one GPX file (or every GPX file below a directory), prints
track statistics and a sample table, optionally exports the profile to CSV
and PNG, and shows the profile chart in a window.

Usage:
    python3 elevation_profile.py track.gpx
    python3 elevation_profile.py track.gpx --csv output.csv
    python3 elevation_profile.py track.gpx --no-gui --csv data.csv --png profile.png
    python3 elevation_profile.py "GPX Data" --no-gui --csv --png
"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional
from zoneinfo import ZoneInfo

from gpx_profile import constants
from gpx_profile import export
from gpx_profile import plotting
from gpx_profile import session
from gpx_profile import statistics

# Pause between windows when several tracks are shown in a row
WINDOW_DELAY_S = 0.5


def output_path(requested: Optional[str], data_file: Path, suffix: str, batch: bool) -> Optional[Path]:
    """
    Resolve where an export goes.

    Args:
        requested: Value given on the command line ("" means "next to the input").
        data_file: The GPX file being processed.
        suffix: File suffix, e.g. "_profile.csv".
        batch: True when processing a directory.

    Returns:
        Output path, or None if this export was not requested.
    """
    if requested is None:
        return None
    if requested == "" or batch:
        return data_file.with_name(f"{data_file.stem}{suffix}")
    return Path(requested)


def process_file(data_file: Path, args: argparse.Namespace, batch: bool) -> None:
    """
    Run the full pipeline for one GPX file.

    Args:
        data_file: GPX file to process.
        args: Parsed command-line arguments.
        batch: True when processing a directory.
    """
    print(f"Loading GPX file: {data_file}")
    print()

    track = session.load_track(data_file)
    print(f"Successfully loaded {len(track)} track points.")
    print()
    print(statistics.format_statistics(track))

    tz = ZoneInfo(args.tz) if args.tz else None
    title = args.title or f"{constants.DEFAULT_TITLE}: {data_file.stem}"
    size = (args.width, args.height)

    csv_path = output_path(args.csv, data_file, "_profile.csv", batch)
    if csv_path is not None:
        export.write_profile_csv(track, csv_path)
        print(f"\nData exported to: {csv_path}")

    png_path = output_path(args.png, data_file, "_profile.png", batch)
    if png_path is not None:
        plotting.save_profile_png(track, png_path, title=title, size=size, tz=tz)
        print(f"Chart saved to: {png_path}")

    if not track.is_empty:
        print()
        print(statistics.format_sample_table(track))

    if args.gui:
        print("\nDisplaying elevation profile...")
        plotting.show_profile(track, title=title, size=size, tz=tz)


def collect_inputs(target: Path) -> List[Path]:
    """Single file, or every GPX file below a directory."""
    if target.is_dir():
        return session.find_gpx_files(target)
    return [target]


def main():
    parser = argparse.ArgumentParser(
        description="GPS elevation profile analyzer for GPX tracks"
    )
    parser.add_argument(
        "target",
        type=str,
        help="GPX file, or a directory to search for .gpx files"
    )
    parser.add_argument(
        "--csv",
        type=str,
        nargs="?",
        const="",
        default=None,
        help="Export profile data to CSV (default name: <track>_profile.csv)"
    )
    parser.add_argument(
        "--png",
        type=str,
        nargs="?",
        const="",
        default=None,
        help="Export profile chart to PNG (default name: <track>_profile.png)"
    )
    parser.add_argument(
        "--title",
        type=str,
        default=None,
        help="Chart title (default: 'Elevation Profile: <track name>')"
    )
    parser.add_argument(
        "--no-gui",
        dest="gui",
        action="store_false",
        help="Don't display graphical plot"
    )
    parser.add_argument(
        "--tz",
        type=str,
        default=None,
        help="IANA time zone for point labels (default: system local time)"
    )
    parser.add_argument(
        "--width",
        type=int,
        default=constants.DEFAULT_CANVAS_SIZE[0],
        help=f"Chart width in pixels (default: {constants.DEFAULT_CANVAS_SIZE[0]})"
    )
    parser.add_argument(
        "--height",
        type=int,
        default=constants.DEFAULT_CANVAS_SIZE[1],
        help=f"Chart height in pixels (default: {constants.DEFAULT_CANVAS_SIZE[1]})"
    )

    args = parser.parse_args()

    target = Path(args.target)
    if not target.exists():
        print(f"Error: File not found: {target}")
        sys.exit(1)

    inputs = collect_inputs(target)
    batch = target.is_dir()
    if not inputs:
        print(f"Error: No GPX files found in {target}")
        sys.exit(1)

    try:
        for idx, data_file in enumerate(inputs):
            if batch:
                print(f"\n{'='*70}")
                print(f"[{idx + 1}/{len(inputs)}] {data_file.name}")
                print(f"{'='*70}")
            if idx > 0 and args.gui:
                time.sleep(WINDOW_DELAY_S)
            process_file(data_file, args, batch)
    except Exception as exc:
        print(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
