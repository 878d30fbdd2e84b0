"""
Parcel Report Exporter

This script exports the status of every tracked parcel to Excel or CSV.
Perfect for when you want to review parcels in spreadsheet software.

For Python beginners:
- This script reads the tracker state saved by main.py
- Converts each parcel and its time status into a pandas DataFrame row
- Exports to Excel (with a summary sheet) or to CSV

Usage: python parcels_to_excel.py [--csv]
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, Optional

import pandas as pd
from dotenv import load_dotenv

from calculators import evaluate, format_duration
from config import EXPORT_COLUMNS
from parcel_store import ParcelStore
from schemas import ParcelRecord, Severity


class ParcelReportExporter:
    """
    Exports parcel status reports.

    This class handles:
    - Turning parcels + locker settings into a flat DataFrame
    - Creating formatted Excel files with a summary sheet
    - Creating CSV files
    """

    def __init__(self, output_folder: Optional[str] = None):
        """Initialize the exporter with configuration."""

        # Load environment variables
        load_dotenv()

        self.output_folder = output_folder or os.getenv('OUTPUT_FOLDER', 'output')
        self.report_prefix = os.getenv('REPORT_FILENAME_PREFIX', 'parcel_report')

        # Ensure output folder exists
        Path(self.output_folder).mkdir(parents=True, exist_ok=True)

    def build_dataframe(self, records: Iterable[ParcelRecord], settings: Dict[str, int],
                        now: Optional[datetime] = None) -> pd.DataFrame:
        """
        Evaluate every parcel and flatten the result into a DataFrame.

        Args:
            records: Parcels to include
            settings: Locker name -> free hours lookup
            now: The instant to evaluate at (defaults to the current time)

        Returns:
            DataFrame with one row per parcel, columns in EXPORT_COLUMNS order
        """

        now = now or datetime.now()
        rows = []

        for record in records:
            status = evaluate(record, settings, now)
            rows.append({
                'id': record.id,
                'locker_name': record.locker_name,
                'pickup_code': record.pickup_code,
                'stored_at': status.stored_at,
                'elapsed_hours': round(status.elapsed_hours, 2),
                'elapsed_display': format_duration(status.elapsed_hours),
                'effective_free_hours': status.effective_free_hours,
                'remaining_hours': round(status.remaining_hours, 2),
                'remaining_display': format_duration(status.remaining_hours),
                'severity': status.severity.value,
                'status_label': status.status_label,
            })

        return pd.DataFrame(rows, columns=EXPORT_COLUMNS)

    def _default_filename(self, suffix: str) -> str:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"{self.report_prefix}_{timestamp}{suffix}"

    def create_excel_file(self, df: pd.DataFrame, output_filename: Optional[str] = None) -> str:
        """
        Create formatted Excel file from DataFrame.

        Args:
            df: DataFrame from build_dataframe()
            output_filename: Optional custom filename

        Returns:
            Path to created Excel file
        """

        output_path = Path(self.output_folder) / (output_filename or self._default_filename(".xlsx"))

        with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
            # Write main data sheet
            df.to_excel(writer, sheet_name='Parcels', index=False)

            # Create summary sheet
            summary_data = [['Total Parcels', len(df)]]
            for severity in Severity:
                summary_data.append([f"Severity: {severity.value}", int((df['severity'] == severity.value).sum())])

            summary_data.append(['', ''])
            summary_data.append(['LOCKER SUMMARY', ''])
            for locker_name, count in df['locker_name'].value_counts().sort_index().items():
                summary_data.append([locker_name or '(unknown)', f"{count} parcels"])

            summary_df = pd.DataFrame(summary_data, columns=['Metric', 'Value'])
            summary_df.to_excel(writer, sheet_name='Summary', index=False)

            # Auto-adjust column widths
            for worksheet in writer.sheets.values():
                for column in worksheet.columns:
                    max_length = 0
                    for cell in column:
                        if cell.value is not None:
                            max_length = max(max_length, len(str(cell.value)))

                    adjusted_width = min(max_length + 2, 50)  # Cap at 50 characters
                    worksheet.column_dimensions[column[0].column_letter].width = adjusted_width

        return str(output_path)

    def create_csv_file(self, df: pd.DataFrame, output_filename: Optional[str] = None) -> str:
        """Create CSV file from DataFrame (UTF-8 with BOM so Excel shows Chinese text)."""

        output_path = Path(self.output_folder) / (output_filename or self._default_filename(".csv"))
        df.to_csv(output_path, index=False, encoding='utf-8-sig')
        return str(output_path)


def main():
    """Main function - handles command line usage."""

    print("📊 Parcel Report Exporter")
    print("=" * 40)

    try:
        load_dotenv()
        state_path = Path(os.getenv('DATA_FOLDER', 'data')) / os.getenv('STATE_FILENAME', 'parcel_tracker.json')
        store = ParcelStore(state_path).load()

        if not store.parcels:
            print("❌ No parcels found. Import notifications first: python main.py import")
            return 1

        exporter = ParcelReportExporter()
        df = exporter.build_dataframe(store.parcels, store.settings)
        print(f"   ✓ Created DataFrame with {len(df)} rows")

        if len(sys.argv) > 1 and sys.argv[1] == "--csv":
            path = exporter.create_csv_file(df)
        else:
            path = exporter.create_excel_file(df)

        print(f"\n✅ Report exported: {Path(path).name}")

    except Exception as e:
        print(f"\n❌ Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    exit(main())
