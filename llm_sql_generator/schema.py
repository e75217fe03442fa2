"""
Şema açıklaması işlemleri için modül.

Veritabanına bağlanılmaz; şema kullanıcının verdiği metin veya YAML
dosyasından alınır.
"""
import os
from typing import Any, Dict

import yaml

from .exceptions import ConfigError

# Örnek şema
SAMPLE_SCHEMA = (
    "Tables:\n"
    "1. users: id (int, primary key), name (varchar), email (varchar), created_at (datetime)\n"
    "2. orders: id (int, primary key), user_id (int, foreign key), amount (decimal), "
    "status (varchar), order_date (datetime)\n"
    "3. products: id (int, primary key), name (varchar), price (decimal)\n"
    "4. order_items: id (int, primary key), order_id (int, foreign key), "
    "product_id (int, foreign key), quantity (int)"
)

SAMPLE_QUESTION = (
    "List the names and total order amounts of users whose orders in the "
    "last month add up to more than 1000"
)


def format_schema_for_prompt(schema: Dict[str, Any]) -> str:
    """Şema bilgisini prompt için düzenlenmiş bir metne dönüştürür.

    Args:
        schema: ``{"tables": {tablo_adi: {"columns": [...], "foreign_keys": [...]}}}``
            biçiminde şema sözlüğü

    Returns:
        İnsan tarafından okunabilir şema metni
    """
    schema_text = []

    for table_name, table_info in schema['tables'].items():
        table_info = table_info or {}
        table_header = f"### {table_name} table"

        # Sütun bilgileri
        columns_info = []
        for col in table_info.get('columns') or []:
            col_info = f"- {col['name']}: {col['type']}"
            if col.get('primary_key'):
                col_info += " (PRIMARY KEY)"
            if not col.get('nullable', True):
                col_info += " NOT NULL"
            if col.get('default') is not None:
                col_info += f" DEFAULT {col['default']}"
            columns_info.append(col_info)

        # Foreign key ilişkileri
        fk_info = []
        for fk in table_info.get('foreign_keys') or []:
            fk_info.append(
                f"- {', '.join(fk['constrained_columns'])} → "
                f"{fk['referred_table']}({', '.join(fk['referred_columns'])})"
            )

        # Tüm bilgileri birleştir
        table_info_text = [table_header]
        table_info_text.extend(columns_info)
        if fk_info:
            table_info_text.append("  Relations:")
            table_info_text.extend(fk_info)

        schema_text.append("\n".join(table_info_text))

    return "\n\n".join(schema_text)


def load_schema_file(path: str) -> str:
    """Şema açıklamasını dosyadan okur.

    ``.yml`` / ``.yaml`` dosyaları ayrıştırılıp ``format_schema_for_prompt``
    ile metne dönüştürülür, diğer dosyalar olduğu gibi döndürülür.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Schema file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        if not path.lower().endswith((".yml", ".yaml")):
            return f.read().strip()
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse schema file {path}: {e}") from e

    # Üst düzeyde "schema:" anahtarı da kabul edilir
    if isinstance(data, dict) and isinstance(data.get("schema"), dict):
        data = data["schema"]
    if not isinstance(data, dict) or not isinstance(data.get("tables"), dict):
        raise ConfigError(f"Invalid schema file format: {path}")

    try:
        return format_schema_for_prompt(data)
    except (KeyError, TypeError, AttributeError) as e:
        raise ConfigError(f"Invalid schema file format: {path}: {e!r}") from e
