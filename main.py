"""
Parcel Locker Tracker

This is the main script that ties the tracker together:
1. Loads locker settings and saved parcels from the data folder
2. Parses pasted notification text into parcel records
3. Works out how long each parcel has left before fees apply
4. Prints a report grouped by locker, or exports it to Excel/CSV

For Python beginners:
- Configuration comes from environment variables (from .env file)
- Run `python main.py report` to see the status of every parcel
- Run `python main.py import messages.txt` (or pipe text in with `-`)

Usage:
    python main.py import [file|-]
    python main.py report
    python main.py delete <parcel id> [-y]
    python main.py clear [-y]
    python main.py export [--csv]
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from calculators import evaluate, format_duration, format_timestamp, group_by_locker
from locker_settings import suggest_locker_name
from parcel_store import ParcelStore
from parcels_to_excel import ParcelReportExporter
from parsers import NotificationParser
from schemas import ParcelRecord, TimeStatus


def confirm(prompt: str, assume_yes: bool = False) -> bool:
    """Ask a yes/no question on the console. assume_yes skips the question."""

    if assume_yes:
        return True
    answer = input(f"{prompt} (y/n): ").lower().strip()
    return answer == 'y'


class ParcelTracker:
    """
    Main tracker class that coordinates storage, parsing and status.

    This class handles:
    - Loading and saving the tracker state
    - Importing notification text
    - Building the per-locker status report
    - Deleting parcels (with confirmation)
    """

    def __init__(self, state_path: Optional[str] = None):
        """Initialize the tracker with configuration from environment variables."""

        # Load environment variables from .env file
        load_dotenv()

        if state_path is None:
            data_folder = os.getenv('DATA_FOLDER', 'data')
            state_filename = os.getenv('STATE_FILENAME', 'parcel_tracker.json')
            state_path = str(Path(data_folder) / state_filename)

        self.store = ParcelStore(state_path).load()
        self.parser = NotificationParser()

    def import_text(self, text: str, now: Optional[datetime] = None) -> List[ParcelRecord]:
        """
        Parse notification text and add the parcels found to the collection.

        Args:
            text: Pasted notification text
            now: Current time (decides the year given to parsed dates)

        Returns:
            The newly imported records (empty if nothing was recognised)
        """

        if not text.strip():
            print("❌ 请输入要导入的数据")
            return []

        new_records = self.parser.parse(text, now)

        if not new_records:
            print("❌ 未能解析出有效的快递信息，请检查格式")
            return []

        self.store.add_parcels(new_records)
        self.store.save()

        print(f"✓ 成功导入 {len(new_records)} 条快递信息")
        return new_records

    def evaluate_all(self, now: Optional[datetime] = None) -> List[Tuple[ParcelRecord, TimeStatus]]:
        """Pair every stored parcel with its time status at `now`."""

        now = now or datetime.now()
        settings = self.store.settings
        return [(record, evaluate(record, settings, now)) for record in self.store.parcels]

    def build_report(self, now: Optional[datetime] = None) -> str:
        """
        Build the console report, one section per locker.

        Args:
            now: The instant to evaluate at (defaults to the current time)

        Returns:
            The report as a multi-line string
        """

        parcels = self.store.parcels
        if not parcels:
            return "📭 暂无快递信息，请先导入数据"

        now = now or datetime.now()
        settings = self.store.settings
        lines = []

        for locker_name, records in group_by_locker(parcels).items():
            lines.append(f"📦 {locker_name or '未知快递柜'}")
            lines.append(f"   免费存放时长：{settings.get(locker_name, 0)}小时 | 共 {len(records)} 个包裹")

            if locker_name not in settings:
                suggestion = suggest_locker_name(locker_name, settings)
                if suggestion:
                    lines.append(f"   💡 未配置该快递柜，是否为「{suggestion}」？")

            for record in records:
                status = evaluate(record, settings, now)
                lines.append(f"   - 取件码 {record.pickup_code or '无'} | {format_timestamp(status.stored_at)}")
                lines.append(
                    f"     存放时长 {format_duration(status.elapsed_hours)} | "
                    f"免费时长 {status.effective_free_hours}小时 | "
                    f"{status.remaining_label} {format_duration(status.remaining_hours)} | "
                    f"{status.status_label}"
                )
                lines.append(f"     ID: {record.id}")

            lines.append("")

        return "\n".join(lines).rstrip()

    def delete_parcel(self, parcel_id: str, assume_yes: bool = False) -> bool:
        """Delete one parcel after confirmation. Returns True if it was removed."""

        if not confirm("确定要删除这条快递信息吗？", assume_yes):
            print("No changes made.")
            return False

        if not self.store.remove_parcel(parcel_id):
            print(f"⚠️  Parcel not found: {parcel_id}")
            return False

        self.store.save()
        print(f"✓ Deleted parcel {parcel_id}")
        return True

    def clear_all(self, assume_yes: bool = False) -> bool:
        """Remove every parcel after confirmation. Locker settings are kept."""

        if not confirm("确定要清空所有快递数据吗？此操作不可恢复！", assume_yes):
            print("No changes made.")
            return False

        self.store.clear_parcels()
        self.store.save()
        print("✓ All parcels cleared")
        return True


def read_import_text(source: Optional[str]) -> str:
    """Read text to import from a file path, or from stdin for None / '-'."""

    if source is None or source == '-':
        return sys.stdin.read()

    with open(source, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point of the script.

    For Python beginners:
    - This function runs when you execute the script
    - It handles any unexpected errors gracefully
    - It returns 0 on success and 1 on failure (the exit code)
    """

    args = list(sys.argv[1:] if argv is None else argv)
    assume_yes = '-y' in args
    args = [arg for arg in args if arg != '-y']

    if not args:
        print(__doc__)
        return 0

    command = args[0]

    try:
        tracker = ParcelTracker()

        if command == "import":
            text = read_import_text(args[1] if len(args) > 1 else None)
            tracker.import_text(text)

        elif command == "report":
            print(tracker.build_report())

        elif command == "delete":
            if len(args) < 2:
                print("❌ Missing parcel id")
                print("Usage: python main.py delete <parcel id> [-y]  (ids are listed by: python main.py report)")
                return 1
            tracker.delete_parcel(args[1], assume_yes)

        elif command == "clear":
            tracker.clear_all(assume_yes)

        elif command == "export":
            exporter = ParcelReportExporter()
            df = exporter.build_dataframe(tracker.store.parcels, tracker.store.settings)
            if '--csv' in args:
                path = exporter.create_csv_file(df)
            else:
                path = exporter.create_excel_file(df)
            print(f"✓ Report exported to: {path}")

        else:
            print(f"❌ Unknown command: {' '.join(args)}")
            print("Usage: python main.py [import [file|-]|report|delete <id>|clear|export [--csv]] [-y]")
            return 1

    except KeyboardInterrupt:
        print("\n\n⏹️  Stopped by user (Ctrl+C)")
        return 1

    except Exception as e:
        print(f"\n❌ Unexpected error: {e}")
        print("\nTroubleshooting tips:")
        print("1. Check that your .env file is configured correctly")
        print("2. Check that the tracker state file is valid JSON (or delete it to start over)")
        print("3. Check that all required packages are installed (pip install -e .)")
        return 1

    return 0


if __name__ == "__main__":
    exit(main())
