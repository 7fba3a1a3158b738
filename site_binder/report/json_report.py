# site_binder/report/json_report.py

"""
Экспорт собранных страниц в JSON для проекта SiteBinder.
"""
import json
from pathlib import Path
from typing import Iterable

from site_binder.crawler.models import PageRecord
from site_binder.exceptions import RenderError
from site_binder.synthesizer import order_pages


def render_json(records: Iterable[PageRecord], output_path: Path | str) -> Path:
    """
    Сохраняет страницы (отсортированные по URL) в JSON по указанному пути.

    :param records: записи PageRecord
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    data = [record.to_dict() for record in order_pages(records)]
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        with output.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
    except OSError as exc:
        raise RenderError(f"Failed to write JSON {output}: {exc}", {"path": str(output)}) from exc
    return output
