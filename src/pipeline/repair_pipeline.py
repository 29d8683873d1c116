# ============================================================================
# repair_pipeline.py — Kayıt Onarım Boru Hattı
# ============================================================================
# NEDEN BU DOSYA VAR?
#   Web API (app.py) ve CLI (main.py) onarım fonksiyonlarını doğrudan
#   çağırmak yerine bu sınıfı kullanır. Böylece:
#     - "?" tahmin adımının açık/kapalı olması config'den tek yerde okunur
#     - Toplu istek boyut sınırı tek yerde uygulanır
#     - Kaç metin alanının değiştiği raporlanır ve loglanır
#
# AKIŞ:
#   configs/config.yaml → RepairConfig → RepairPipeline
#   payload → repair_structure → {"data": ..., "changed": n}
#
# ÇAĞRILIŞ ŞEKLİ:
#   pipeline = RepairPipeline()
#   result = pipeline.repair_batch(rows)
#   # → {"data": [...], "total": 25, "changed": 7}
# ============================================================================

import os
import sys
from dataclasses import dataclass
from typing import Optional

from src.components.sql_encoding import to_sql_text
from src.components.structure_repair import (
    count_changed_strings,
    repair_records,
    repair_structure,
)
from src.components.text_repair import repair_text
from src.exception import CustomException
from src.logger import logging
from src.utils.common import load_yaml


# Çalışma dizininden bağımsız: proje_kökü/configs/config.yaml
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
DEFAULT_CONFIG_PATH = os.path.join(PROJECT_ROOT, "configs", "config.yaml")


# ─────────────────────────────────────────────────────────────────────────────
# KONFİGÜRASYON
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class RepairConfig:
    """
    Onarım ayarları. config.yaml → text_repair bölümünden okunur.

    Alanlar:
      apply_heuristics: "?" tahmin adımı (3. adım) uygulansın mı
      max_batch_size: Tek istekte kabul edilen en fazla kayıt
      log_changes: Değişen alan sayısı INFO seviyesinde loglansın mı
    """
    apply_heuristics: bool = True
    max_batch_size: int = 1000
    log_changes: bool = True

    @classmethod
    def from_yaml(cls, file_path: str = DEFAULT_CONFIG_PATH) -> "RepairConfig":
        """YAML'daki text_repair bölümünden config üretir; eksik alanlar varsayılan kalır."""
        try:
            section = load_yaml(file_path).get("text_repair") or {}
            config = cls(**{k: v for k, v in section.items() if k in cls.__dataclass_fields__})
            config.validate()
            return config
        except Exception as e:
            raise CustomException(e, sys)

    def validate(self) -> None:
        """
        Alan tiplerini kontrol eder. YAML'da tırnak içinde yazılmış "false"
        bir string'dir ve bool() ile True olurdu, bu yüzden dönüştürülmez.
        """
        for name in ("apply_heuristics", "log_changes"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"{name} true/false olmalı, gelen: {value!r}")

        if isinstance(self.max_batch_size, bool) or not isinstance(self.max_batch_size, int):
            raise ValueError(f"max_batch_size tam sayı olmalı, gelen: {self.max_batch_size!r}")
        if self.max_batch_size < 1:
            raise ValueError(f"max_batch_size en az 1 olmalı, gelen: {self.max_batch_size}")


# ─────────────────────────────────────────────────────────────────────────────
# ANA PIPELINE
# ─────────────────────────────────────────────────────────────────────────────

class RepairPipeline:
    """
    Config'e göre metin, kayıt listesi veya iç içe yapı onarır.

    Pipeline durumsuzdur (stateless); aynı nesne eşzamanlı isteklerde
    paylaşılabilir.

    Kullanım:
        pipeline = RepairPipeline()
        pipeline.repair_text("ÝSTANBUL")          # → "İSTANBUL"
        pipeline.repair({"name": "Þiþli"})        # → {"data": {...}, "changed": 1}
    """

    def __init__(self, config: Optional[RepairConfig] = None):
        self.config = config or RepairConfig.from_yaml()
        logging.info(
            f"RepairPipeline hazır | heuristics={self.config.apply_heuristics} "
            f"| max_batch_size={self.config.max_batch_size}"
        )

    def repair_text(self, text):
        """Tek bir metni onarır."""
        return repair_text(text, apply_heuristics=self.config.apply_heuristics)

    def repair(self, payload) -> dict:
        """
        Herhangi bir JSON benzeri yapıyı onarır.

        Returns:
            dict: {"data": onarılmış yapı, "changed": değişen metin sayısı}
        """
        repaired = repair_structure(payload, apply_heuristics=self.config.apply_heuristics)
        changed = count_changed_strings(payload, repaired)
        self._log_changes("Yapı", changed)
        return {"data": repaired, "changed": changed}

    def repair_batch(self, records: list) -> dict:
        """
        Kayıt listesini onarır.

        Raises:
            ValueError: Kayıt sayısı max_batch_size'ı aşarsa
        """
        if len(records) > self.config.max_batch_size:
            raise ValueError(
                f"Tek seferde en fazla {self.config.max_batch_size} kayıt "
                f"gönderilebilir (gelen: {len(records)})."
            )

        repaired = repair_records(records, apply_heuristics=self.config.apply_heuristics)
        changed = count_changed_strings(records, repaired)
        self._log_changes(f"{len(records)} kayıt", changed)
        return {"data": repaired, "total": len(records), "changed": changed}

    def encode_for_sql(self, text):
        """Metni veritabanına yazılacak cp1254 formuna çevirir."""
        return to_sql_text(text)

    def _log_changes(self, label: str, changed: int) -> None:
        if self.config.log_changes:
            logging.info(f"{label} onarıldı → {changed} metin alanı değişti")
