"""Tests für das Konfigurationssystem."""

from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

from config.defaults import (
    DEFAULT_DAYS,
    DEFAULT_TIME_SLOTS,
    default_periods,
    default_planner_config,
    default_time_grid,
)
from config.manager import ConfigManager
from config.schema import (
    AllocatorConfig,
    AvailabilityGranularity,
    DayMode,
    PeriodDefinition,
    PlannerConfig,
    ScoringWeights,
    TimeGridConfig,
)


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_time_grid_valid(self):
        """Default-Zeitraster: 7 Slots, Montag bis Freitag."""
        tg = default_time_grid()
        assert tg.time_slots == DEFAULT_TIME_SLOTS
        assert len(tg.time_slots) == 7
        assert tg.day_names == DEFAULT_DAYS

    def test_default_periods(self):
        periods = default_periods()
        assert set(periods) == {"Lecture", "Seminary", "Exam"}
        assert periods["Lecture"].start == date(2024, 12, 1)
        assert periods["Exam"].end == date(2024, 12, 31)
        assert all(p.is_complete for p in periods.values())

    def test_default_allocator_settings(self):
        alloc = default_planner_config().allocator
        assert alloc.event_duration == 2
        assert alloc.day_mode == DayMode.FIXED
        assert alloc.granularity == AvailabilityGranularity.SLOT
        assert not alloc.allow_room_overlap
        assert not alloc.report_discarded

    def test_default_weights(self):
        w = ScoringWeights()
        assert (w.base_score, w.teacher_unavailable_penalty,
                w.room_unavailable_penalty, w.dispersion_penalty,
                w.dispersion_threshold) == (100, 30, 50, 20, 4)

    def test_get_period_uses_active(self):
        config = default_planner_config()
        assert config.get_period() == config.periods["Lecture"]
        assert config.get_period("Exam").start == date(2024, 12, 23)
        assert config.get_period("Sommer") is None


# ─── SCHEMA-VALIDIERUNG ───────────────────────────────────────────────────────

class TestSchemaValidation:
    def test_duplicate_slots_rejected(self):
        with pytest.raises(ValidationError):
            TimeGridConfig(time_slots=["9:00-10:20", "9:00-10:20"])

    def test_duplicate_days_rejected(self):
        with pytest.raises(ValidationError):
            TimeGridConfig(time_slots=["a"], day_names=["Monday", "Monday"])

    def test_event_duration_positive(self):
        with pytest.raises(ValidationError):
            AllocatorConfig(event_duration=0)

    def test_negative_penalty_rejected(self):
        with pytest.raises(ValidationError):
            ScoringWeights(room_unavailable_penalty=-5)

    def test_blank_period_name_rejected(self):
        with pytest.raises(ValidationError):
            PlannerConfig(time_grid=default_time_grid(),
                          periods={" ": PeriodDefinition()})

    def test_incomplete_period_allowed(self):
        """Fehlende Grenzen fallen erst beim Lauf auf."""
        p = PeriodDefinition(start=date(2024, 12, 1))
        assert not p.is_complete

    def test_enum_from_string(self):
        alloc = AllocatorConfig(day_mode="period", granularity="day")
        assert alloc.day_mode == DayMode.PERIOD
        assert alloc.granularity == AvailabilityGranularity.DAY


# ─── CONFIG-MANAGER ───────────────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Config speichern und wieder laden ergibt identische Werte."""
        config = default_planner_config()
        config.allocator.weights.dispersion_penalty = 25
        path = tmp_path / "planner_config.yaml"

        mgr = ConfigManager(path)
        assert mgr.first_run_check()
        assert mgr.save(config) == path
        assert not mgr.first_run_check()

        loaded = mgr.load()
        assert loaded == config
        assert loaded.allocator.weights.dispersion_penalty == 25

    def test_saved_yaml_has_comments(self, tmp_path: Path):
        path = tmp_path / "planner_config.yaml"
        ConfigManager(path).save(default_planner_config())
        text = path.read_text(encoding="utf-8")
        assert text.startswith("# ====")
        assert "─── Allokator ───" in text
        assert "# fixed | period" in text
        assert "2024-12-01" in text

    def test_load_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            ConfigManager(tmp_path / "fehlt.yaml").load()

    def test_load_invalid_content(self, tmp_path: Path):
        path = tmp_path / "kaputt.yaml"
        path.write_text(
            "time_grid:\n"
            "  time_slots: [a, a]\n",
            encoding="utf-8",
        )
        with pytest.raises(ValueError, match="ungültig"):
            ConfigManager(path).load()

    def test_load_partial_config_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "minimal.yaml"
        path.write_text(
            "time_grid:\n"
            "  time_slots: ['8:00-9:30', '9:45-11:15']\n"
            "allocator:\n"
            "  day_mode: period\n"
            "  active_period: Block\n"
            "periods:\n"
            "  Block:\n"
            "    start: 2025-03-03\n"
            "    end: 2025-03-07\n",
            encoding="utf-8",
        )
        config = ConfigManager(path).load()
        assert config.time_grid.day_names == DEFAULT_DAYS
        assert config.allocator.event_duration == 2
        assert config.get_period().end == date(2025, 3, 7)


# ─── MAIN.PY CLI ──────────────────────────────────────────────────────────────

class TestCli:
    def test_help(self):
        """main.py --help gibt Usage aus."""
        from click.testing import CliRunner
        from main import cli
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Usage" in result.output

    def test_commands_registered(self):
        from click.testing import CliRunner
        from main import cli
        runner = CliRunner()
        for cmd in (["run"], ["sample"], ["validate"], ["export"], ["config", "init"]):
            result = runner.invoke(cli, cmd + ["--help"])
            assert result.exit_code == 0, cmd

    def test_config_init_writes_yaml(self):
        from click.testing import CliRunner
        from main import cli
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["config", "init"])
            assert result.exit_code == 0
            assert Path("config/planner_config.yaml").exists()
            assert ConfigManager().load() == default_planner_config()

    def test_sample_then_validate(self):
        from click.testing import CliRunner
        from main import cli
        runner = CliRunner()
        with runner.isolated_filesystem():
            assert runner.invoke(cli, ["sample"]).exit_code == 0
            assert Path("output/schedule_data.json").exists()
            assert runner.invoke(cli, ["validate"]).exit_code == 0

    def test_run_sample_writes_result_and_exports(self):
        from click.testing import CliRunner
        from main import cli
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["run", "--sample", "--excel", "--pdf"])
            assert result.exit_code == 0, result.output
            assert Path("output/allocation_result.json").exists()
            assert list(Path("output/logs").glob("schedule_log_*.txt"))
            assert Path("output/einsatzplan.xlsx").exists()
            assert Path("output/lehrkraefte.pdf").exists()

    def test_run_without_data_fails(self):
        from click.testing import CliRunner
        from main import cli
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["run"])
            assert result.exit_code == 1
