# privacy_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта PrivacyScout.

Сериализация объекта DiscoveryReport в файл.
"""
from pathlib import Path

from privacy_scout.aggregator import DiscoveryReport


def render_json(report: DiscoveryReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект DiscoveryReport с результатами пакета
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 пробела
    :return: Path сохранённого файла

    Пример:
    ```python
    from privacy_scout.report.json_report import render_json
    report_path = render_json(report, 'reports/privacy.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(report.json(pretty=pretty), encoding="utf-8")
    return output
