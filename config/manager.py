"""Konfigurationsmanager: Laden, Speichern und Validieren der Planer-Config.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.schema import PlannerConfig

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Einsatzplaner: Konfiguration
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "time_grid": (
        "Zeitraster",
        "Reihenfolge von Tagen und Slots = Suchreihenfolge des Allokators.",
    ),
    "periods": (
        "Planungszeiträume",
        "Nur im day_mode 'period' relevant. Grenzen sind inklusive.",
    ),
    "allocator": (
        "Allokator",
        "Gewichte: Basiswert minus Abzüge. Defaults = 100 / 30 / 50 / 20 (ab 4h).",
    ),
    "output": (
        "Ausgabe",
        None,
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "planner_config.yaml"

    def __init__(self, path: Optional[Path] = None) -> None:
        if path is not None:
            self.DEFAULT_CONFIG = Path(path)

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> PlannerConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = Path(path) if path is not None else self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py config init' aus."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            # Umweg über JSON: CommentedMap/CommentedSeq → reine dict/list
            return PlannerConfig.model_validate(json.loads(json.dumps(raw, default=str)))
        except Exception as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    # ─── Speichern ───

    def save(self, config: PlannerConfig, path: Optional[Path] = None) -> Path:
        """Speichere Config als YAML mit Abschnittskommentaren."""
        target = Path(path) if path is not None else self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Konfiguration gespeichert: {target}")
        return target

    def _build_commented_yaml(self, config: PlannerConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            if field not in cm:
                continue
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        allocator_map = CommentedMap(cm["allocator"])
        allocator_map.yaml_add_eol_comment("Stunden pro Veranstaltung", "event_duration")
        allocator_map.yaml_add_eol_comment("fixed | period", "day_mode")
        allocator_map.yaml_add_eol_comment("slot | day", "granularity")
        cm["allocator"] = allocator_map

        return cm
