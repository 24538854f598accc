"""
Tests for the recent diagnostics summary and its SQLite store.

These tests verify:
1. Only analyses from the last 30 days are summarized, newest first
2. Per-kind limits (3 X-rays, 3 blood work, 2 labs)
3. A failing or malformed source never breaks the summary
4. DiagnosticsDatabase reads rows back as DiagnosticRecords

Usage:
    pytest tests/test_diagnostics.py -v
"""
import json
import sqlite3
import pytest

from pet_context.diagnostics import (
    SECTION_HEADER,
    format_record,
    recent_records,
    summarize_recent_diagnostics,
)
from pet_context.models import DiagnosticRecord
from server.context_api.database import (
    BLOOD_WORK_TABLE,
    LAB_TABLE,
    XRAY_TABLE,
    DiagnosticsDatabase,
    create_schema,
)

from conftest import NOW, days_ago_iso


class FakeDiagnostics:
    """Dict-backed diagnostics source."""

    def __init__(self, xrays=None, blood=None, labs=None):
        self.xrays = xrays or []
        self.blood = blood or []
        self.labs = labs or []

    def get_xray_analyses(self, dog_id):
        return self.xrays

    def get_blood_work_analyses(self, dog_id):
        return self.blood

    def get_lab_analyses(self, dog_id):
        return self.labs


class BrokenXrays(FakeDiagnostics):
    def get_xray_analyses(self, dog_id):
        raise sqlite3.OperationalError("no such table: xray_analyses")


def _xray(days, summary="Normal study.", **extra):
    return {"createdAt": days_ago_iso(days), "bodyRegion": "thorax", "summary": summary, **extra}


class TestSummarizeRecentDiagnostics:
    """Condensed diagnostics section for premium context."""

    def test_no_source_or_dog(self):
        source = FakeDiagnostics(xrays=[_xray(1)])
        assert summarize_recent_diagnostics(None, "dog-1", NOW) == ""
        assert summarize_recent_diagnostics(source, None, NOW) == ""
        assert summarize_recent_diagnostics(source, "", NOW) == ""

    def test_nothing_recent(self):
        source = FakeDiagnostics(xrays=[_xray(31)], labs=[{"createdAt": days_ago_iso(45)}])
        assert summarize_recent_diagnostics(source, "dog-1", NOW) == ""

    def test_full_section(self):
        source = FakeDiagnostics(
            xrays=[_xray(3, summary="Radius fracture.", overall_impression="abnormal_urgent", bodyRegion="limb")],
            blood=[{"createdAt": days_ago_iso(10), "overallAssessment": "needs_attention",
                    "keyFindings": ["Mild anemia", "Elevated WBC", "Low platelets"]}],
            labs=[{"createdAt": days_ago_iso(5), "labType": "Urinalysis", "summary": "Within normal limits."}],
        )

        section = summarize_recent_diagnostics(source, "dog-1", NOW)

        assert section.split("\n") == [
            SECTION_HEADER,
            "- X-ray (2026-10-13, limb): abnormal_urgent - Radius fracture.",
            "- Blood work (2026-10-06): needs_attention - Mild anemia; Elevated WBC",
            "- Urinalysis (2026-10-11): Within normal limits.",
        ]

    def test_limits_and_order(self):
        source = FakeDiagnostics(
            xrays=[_xray(d, summary=f"study {d}") for d in (20, 1, 15, 7, 2)],
            labs=[{"createdAt": days_ago_iso(d), "summary": f"lab {d}"} for d in (9, 3, 6)],
        )

        lines = summarize_recent_diagnostics(source, "dog-1", NOW).split("\n")[1:]

        assert [line.split(": ", 1)[1] for line in lines] == ["study 1", "study 2", "study 7", "lab 3", "lab 6"]
        assert lines[-1].startswith("- Lab (")

    def test_failing_source_is_skipped(self, caplog):
        source = BrokenXrays(blood=[{"createdAt": days_ago_iso(1), "summary": "Normal panel."}])

        section = summarize_recent_diagnostics(source, "dog-1", NOW)

        assert "X-ray" not in section
        assert "- Blood work (2026-10-15): Normal panel." in section
        assert "xray lookup failed" in caplog.text

    def test_malformed_records_are_skipped(self):
        source = FakeDiagnostics(
            xrays=["not a record", {"createdAt": "last week"}, {"keyFindings": 3}, _xray(1)],
        )

        lines = summarize_recent_diagnostics(source, "dog-1", NOW).split("\n")

        assert len(lines) == 2

    def test_accepts_model_instances(self):
        record = DiagnosticRecord(created_at=NOW, summary="Clean.")
        source = FakeDiagnostics(labs=[record])
        assert "- Lab (2026-10-16): Clean." in summarize_recent_diagnostics(source, "dog-1", NOW)


class TestRecordHelpers:
    """recent_records and format_record."""

    def test_recent_records_window_boundary(self):
        records = [DiagnosticRecord(created_at=days_ago_iso(30)), DiagnosticRecord(created_at=days_ago_iso(30.5))]
        assert len(recent_records(records, NOW, limit=5)) == 1

    def test_format_without_body(self):
        record = DiagnosticRecord()
        assert format_record("X-ray", NOW, record) == "- X-ray (2026-10-16)"


@pytest.fixture
def diagnostics_db_path(tmp_path):
    """SQLite diagnostics database with a few rows for dog-1."""
    path = tmp_path / "diagnostics.db"
    conn = sqlite3.connect(path)
    create_schema(conn)
    rows = [
        (XRAY_TABLE, "x1", "dog-1", "2026-10-01T10:00:00Z",
         json.dumps({"body_region": "limb", "overall_impression": "abnormal_urgent", "summary": "Fracture."})),
        (XRAY_TABLE, "x2", "dog-1", "2026-10-10T10:00:00Z", json.dumps({"summary": "Healing well."})),
        (XRAY_TABLE, "x3", "dog-2", "2026-10-11T10:00:00Z", json.dumps({"summary": "Other dog."})),
        (XRAY_TABLE, "x4", "dog-1", "2026-10-12T10:00:00Z", json.dumps({"summary": "Bad row.", "key_findings": "x"})),
        (BLOOD_WORK_TABLE, "b1", "dog-1", "2026-10-02T10:00:00Z", "{not json"),
        (BLOOD_WORK_TABLE, "b2", "dog-1", "2026-10-03T10:00:00Z", json.dumps(["a", "list"])),
        (LAB_TABLE, "l1", "dog-1", "2026-10-04T10:00:00Z",
         json.dumps({"lab_type": "Fecal", "overall_assessment": "normal"})),
    ]
    for table, *values in rows:
        conn.execute(
            f"INSERT INTO {table} (id, dog_id, created_at, analysis) VALUES (?, ?, ?, ?)", values
        )
    conn.commit()
    conn.close()
    return str(path)


class TestDiagnosticsDatabase:
    """Read-only SQLite diagnostics store."""

    def test_available(self, diagnostics_db_path, tmp_path):
        assert DiagnosticsDatabase(diagnostics_db_path).available()
        assert not DiagnosticsDatabase(str(tmp_path / "missing.db")).available()

    def test_xrays_newest_first_for_dog(self, diagnostics_db_path):
        records = DiagnosticsDatabase(diagnostics_db_path).get_xray_analyses("dog-1")

        assert [r.id for r in records] == ["x2", "x1"]
        assert records[1].overall_assessment == "abnormal_urgent"
        assert records[1].body_region == "limb"
        assert records[1].dog_id == "dog-1"

    def test_invalid_payloads_skipped(self, diagnostics_db_path):
        assert DiagnosticsDatabase(diagnostics_db_path).get_blood_work_analyses("dog-1") == []

    def test_invalid_record_does_not_hide_others(self, diagnostics_db_path, caplog):
        records = DiagnosticsDatabase(diagnostics_db_path).get_xray_analyses("dog-1")

        assert [r.id for r in records] == ["x2", "x1"]
        assert "Skipping xray_analyses row x4" in caplog.text

    def test_lab_fields(self, diagnostics_db_path):
        (lab,) = DiagnosticsDatabase(diagnostics_db_path).get_lab_analyses("dog-1")
        assert lab.lab_type == "Fecal"
        assert lab.created_at == "2026-10-04T10:00:00Z"

    def test_unknown_dog(self, diagnostics_db_path):
        assert DiagnosticsDatabase(diagnostics_db_path).get_lab_analyses("dog-9") == []

    def test_connection_is_read_only(self, diagnostics_db_path):
        db = DiagnosticsDatabase(diagnostics_db_path)
        with db.get_conn() as conn:
            with pytest.raises(sqlite3.OperationalError):
                conn.execute(f"DELETE FROM {XRAY_TABLE}")

    def test_summary_from_database(self, diagnostics_db_path):
        section = summarize_recent_diagnostics(DiagnosticsDatabase(diagnostics_db_path), "dog-1", NOW)

        assert section.split("\n") == [
            SECTION_HEADER,
            "- X-ray (2026-10-10): Healing well.",
            "- X-ray (2026-10-01, limb): abnormal_urgent - Fracture.",
            "- Fecal (2026-10-04): normal",
        ]
