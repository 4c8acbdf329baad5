"""
DuckDB-backed point index keyed by geohash.

Points are stored with their geohash at a fixed precision. Because a
geohash prefix names an enclosing cell, cell membership and 3x3
neighbourhood searches become string-prefix queries.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple
import logging

import duckdb

from .domain import Coordinate, Domain, DEFAULT_DOMAIN, DIRECTIONS
from .geohash import adjacent, bounds, encode
from .errors import OutOfRange


logger = logging.getLogger(__name__)


@dataclass
class IndexConfig:
    """Configuration for a GeohashIndex."""

    precision: int = 12
    """Length of the geohash stored for each point."""

    database: str = ":memory:"
    """DuckDB database path, or ':memory:' for an in-process database."""

    def __post_init__(self):
        if not 1 <= self.precision <= 12:
            raise ValueError("precision must be between 1 and 12")


class GeohashIndex:
    """
    Spatial index of keyed points over the geohash16 grid.

    Each point is stored once; adding an existing key replaces it.
    """

    def __init__(
        self,
        config: Optional[IndexConfig] = None,
        domain: Domain = DEFAULT_DOMAIN,
    ):
        """
        Initialize the index.

        Args:
            config: Index configuration (defaults to IndexConfig())
            domain: Working rectangle used to encode points
        """
        self.config = config or IndexConfig()
        self.domain = domain

        self._con = duckdb.connect(self.config.database)
        self._con.execute("""
            CREATE TABLE IF NOT EXISTS points (
                key VARCHAR PRIMARY KEY,
                lat DOUBLE NOT NULL,
                lon DOUBLE NOT NULL,
                geohash VARCHAR NOT NULL
            )
        """)
        self._check_metadata()
        logger.info(
            "Opened geohash index at %s (precision %d)",
            self.config.database,
            self.config.precision,
        )

    def _check_metadata(self) -> None:
        """
        Record the precision and domain of a new database, or verify them
        when reopening an existing one.

        Stored hashes are only comparable under the settings they were
        encoded with, so a mismatch raises ValueError.
        """
        self._con.execute("""
            CREATE TABLE IF NOT EXISTS index_meta (
                precision INTEGER NOT NULL,
                lat_min DOUBLE NOT NULL,
                lat_max DOUBLE NOT NULL,
                lon_min DOUBLE NOT NULL,
                lon_max DOUBLE NOT NULL
            )
        """)
        expected = (
            self.config.precision,
            float(self.domain.lat_min),
            float(self.domain.lat_max),
            float(self.domain.lon_min),
            float(self.domain.lon_max),
        )

        stored = self._con.execute(
            "SELECT precision, lat_min, lat_max, lon_min, lon_max FROM index_meta"
        ).fetchone()
        if stored is None:
            self._con.execute(
                "INSERT INTO index_meta VALUES (?, ?, ?, ?, ?)", list(expected)
            )
            return

        if tuple(stored) != expected:
            self.close()
            raise ValueError(
                f"Index at {self.config.database} was built with "
                f"precision/domain {tuple(stored)}, not {expected}"
            )

    def _check_precision(self, precision: int) -> None:
        if not 1 <= precision <= self.config.precision:
            raise ValueError(
                f"precision must be between 1 and {self.config.precision}"
            )

    def add(self, key: str, lat: float, lon: float) -> str:
        """
        Add or replace a point.

        Args:
            key: Unique identifier of the point
            lat: Latitude in degrees
            lon: Longitude in degrees

        Returns:
            Geohash the point was stored under
        """
        geohash = encode(lat, lon, self.config.precision, domain=self.domain)
        self._con.execute(
            "INSERT OR REPLACE INTO points VALUES (?, ?, ?, ?)",
            [key, float(lat), float(lon), geohash],
        )
        logger.debug("Indexed %s at %s", key, geohash)
        return geohash

    def add_batch(self, points: Iterable[Tuple[str, float, float]]) -> int:
        """
        Add or replace many points in one statement.

        Args:
            points: Iterable of (key, lat, lon) tuples

        Returns:
            Number of points stored
        """
        rows = [
            [key, float(lat), float(lon),
             encode(lat, lon, self.config.precision, domain=self.domain)]
            for key, lat, lon in points
        ]
        if not rows:
            return 0

        self._con.executemany(
            "INSERT OR REPLACE INTO points VALUES (?, ?, ?, ?)", rows
        )
        logger.info("Indexed batch of %d points", len(rows))
        return len(rows)

    def remove(self, key: str) -> bool:
        """Remove a point. Returns True if it was present."""
        removed = self._con.execute(
            "DELETE FROM points WHERE key = ? RETURNING key", [key]
        ).fetchall()
        return bool(removed)

    def locate(self, key: str) -> Optional[Coordinate]:
        """Return the stored coordinate of a point, or None."""
        row = self._con.execute(
            "SELECT lat, lon FROM points WHERE key = ?", [key]
        ).fetchone()
        if row is None:
            return None
        return Coordinate(row[0], row[1])

    def __len__(self) -> int:
        return self._con.execute("SELECT count(*) FROM points").fetchone()[0]

    def cell_members(self, geohash: str) -> List[str]:
        """
        List the keys of all points inside a cell.

        Args:
            geohash: Cell to search; at most the index precision long

        Returns:
            Sorted list of keys
        """
        bounds(geohash, domain=self.domain)
        self._check_precision(len(geohash))

        rows = self._con.execute(
            "SELECT key FROM points WHERE starts_with(geohash, ?) ORDER BY key",
            [geohash.lower()],
        ).fetchall()
        return [row[0] for row in rows]

    def nearby(self, lat: float, lon: float, precision: int) -> List[str]:
        """
        List the keys of points in the cell containing (lat, lon) and the
        8 cells around it.

        Cells that would fall outside the working domain are skipped.

        Args:
            lat: Latitude in degrees
            lon: Longitude in degrees
            precision: Cell size to search at

        Returns:
            Sorted list of keys
        """
        self._check_precision(precision)
        center = encode(lat, lon, precision, domain=self.domain)

        cells = [center]
        for direction in DIRECTIONS:
            try:
                if len(direction) == 1:
                    cells.append(adjacent(center, direction))
                else:
                    cells.append(
                        adjacent(adjacent(center, direction[0]), direction[1])
                    )
            except OutOfRange:
                logger.debug("Skipping %s neighbour of %s", direction, center)

        logger.debug("Searching %d cells around %s", len(cells), center)
        rows = self._con.execute(
            """
            SELECT key FROM points
            WHERE list_contains(?, left(geohash, ?))
            ORDER BY key
            """,
            [cells, precision],
        ).fetchall()
        return [row[0] for row in rows]

    def cell_counts(self, precision: int) -> Dict[str, int]:
        """
        Count points per cell at a given precision.

        Returns:
            Dictionary mapping cell geohash -> point count, ordered by cell
        """
        self._check_precision(precision)
        rows = self._con.execute(
            """
            SELECT left(geohash, ?) AS cell, count(*) AS n
            FROM points
            GROUP BY cell
            ORDER BY cell
            """,
            [precision],
        ).fetchall()
        return {cell: n for cell, n in rows}

    def close(self) -> None:
        """Close the database connection."""
        if getattr(self, "_con", None) is not None:
            self._con.close()
            self._con = None
            logger.info("Closed geohash index at %s", self.config.database)

    def __del__(self):
        """Cleanup on garbage collection."""
        self.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
