"""Persistent SQLite storage for domain analyses."""

import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Any


class ResultsStore:
    """Keeps the latest analysis per domain, with metric and pricing columns."""

    def __init__(self, db_file: str = "data/results/analyses.db"):
        self.db_file = Path(db_file)
        self.db_file.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        with sqlite3.connect(self.db_file) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS analyses (
                    domain TEXT PRIMARY KEY,
                    name TEXT,
                    extension TEXT,

                    -- Metrics
                    overall_score INTEGER,
                    length REAL,
                    has_keywords INTEGER,
                    memorability REAL,
                    brandability REAL,
                    keyword_placement REAL,
                    domain_extension REAL,

                    -- Pricing (NULL when enrichment was unavailable)
                    available INTEGER,
                    price REAL,
                    currency TEXT,
                    registrar TEXT,

                    first_analyzed TEXT,
                    last_analyzed TEXT,
                    analysis_count INTEGER DEFAULT 1
                )
            """)

            conn.execute("CREATE INDEX IF NOT EXISTS idx_overall_score ON analyses(overall_score)")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_extension ON analyses(extension)")
            conn.commit()

    def add(self, result) -> None:
        """Insert or update the row for an AnalysisResult."""
        name, _, extension = result.domain.rpartition('.')
        metrics = result.metrics.as_row()
        pricing = result.pricing
        now = datetime.now().isoformat()

        with sqlite3.connect(self.db_file) as conn:
            existing = conn.execute(
                "SELECT first_analyzed, analysis_count FROM analyses WHERE domain = ?",
                (result.domain,)
            ).fetchone()

            if existing:
                first_analyzed, analysis_count = existing
                analysis_count += 1
            else:
                first_analyzed = now
                analysis_count = 1

            conn.execute("""
                INSERT OR REPLACE INTO analyses (
                    domain, name, extension, overall_score, length, has_keywords,
                    memorability, brandability, keyword_placement, domain_extension,
                    available, price, currency, registrar,
                    first_analyzed, last_analyzed, analysis_count
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                result.domain, name, extension,
                metrics['overall_score'], metrics['length'], int(metrics['has_keywords']),
                metrics['memorability'], metrics['brandability'],
                metrics['keyword_placement'], metrics['domain_extension'],
                (1 if pricing.available else 0) if pricing else None,
                pricing.price if pricing else None,
                pricing.currency if pricing else None,
                pricing.registrar if pricing else None,
                first_analyzed, now, analysis_count
            ))
            conn.commit()

    def add_batch(self, results) -> None:
        for result in results:
            self.add(result)

    def get(self, domain: str) -> Optional[Dict[str, Any]]:
        with sqlite3.connect(self.db_file) as conn:
            conn.row_factory = sqlite3.Row
            row = conn.execute(
                "SELECT * FROM analyses WHERE domain = ?", (domain,)
            ).fetchone()
            return dict(row) if row else None

    def query(
        self,
        min_score: Optional[int] = None,
        extension: Optional[str] = None,
        available: Optional[bool] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """Stored analyses, best score first."""
        conditions = []
        params: List[Any] = []

        if min_score is not None:
            conditions.append("overall_score >= ?")
            params.append(min_score)

        if extension is not None:
            conditions.append("extension = ?")
            params.append(extension)

        if available is not None:
            conditions.append("available = ?")
            params.append(1 if available else 0)

        sql = "SELECT * FROM analyses"
        if conditions:
            sql += " WHERE " + " AND ".join(conditions)
        sql += " ORDER BY overall_score DESC, last_analyzed DESC"
        if limit:
            sql += " LIMIT ?"
            params.append(int(limit))

        with sqlite3.connect(self.db_file) as conn:
            conn.row_factory = sqlite3.Row
            rows = conn.execute(sql, params).fetchall()
            return [dict(row) for row in rows]

    def stats(self) -> Dict[str, Any]:
        with sqlite3.connect(self.db_file) as conn:
            total, avg_score, max_score, min_score = conn.execute(
                "SELECT COUNT(*), AVG(overall_score), MAX(overall_score), MIN(overall_score) FROM analyses"
            ).fetchone()

            ext_rows = conn.execute("""
                SELECT extension, COUNT(*) AS cnt, AVG(overall_score)
                FROM analyses GROUP BY extension ORDER BY cnt DESC
            """).fetchall()

            return {
                "total": total,
                "avg_score": round(avg_score, 1) if avg_score is not None else 0,
                "max_score": max_score or 0,
                "min_score": min_score or 0,
                "extensions": {
                    row[0]: {"total": row[1], "avg_score": round(row[2], 1)} for row in ext_rows
                }
            }
