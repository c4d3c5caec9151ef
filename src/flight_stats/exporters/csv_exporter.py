# src/flight_stats/exporters/csv_exporter.py
from pathlib import Path
from typing import Iterable, Union

import pandas as pd

from ..errors import ExportError
from ..models import EXPORT_HEADERS, FlightRecord
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_OUTPUT_PATH = Path('out') / 'flightdata.csv'


class CSVExporter:
    def __init__(self, output_path: Union[str, Path] = DEFAULT_OUTPUT_PATH):
        self.output_path = Path(output_path)

    def to_dataframe(self, flights: Iterable[FlightRecord]) -> pd.DataFrame:
        df = pd.DataFrame([flight.to_row() for flight in flights], columns=EXPORT_HEADERS)
        # Nullable ints keep "1234" instead of "1234.0" when a distance is unknown
        df['Distance'] = df['Distance'].astype('Int64')
        df['Duration'] = df['Duration'].astype('Int64')
        return df

    def export(self, flights: Iterable[FlightRecord]) -> Path:
        """
        Write flights to the CSV file, creating its directory if needed.

        Raises:
            ExportError: when the file cannot be written
        """
        df = self.to_dataframe(flights)
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(self.output_path, index=False)
        except OSError as e:
            logger.error(f"Failed to export flights to CSV: {e}")
            raise ExportError(f"Cannot write {self.output_path}: {e}") from e

        logger.info(f"Exported {len(df)} flights to {self.output_path}")
        return self.output_path
