# === FILE: privacy_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска PrivacyScout через командную строку.

Команды:
  discover  Найти privacy-страницу и контактные адреса для одного URL
  batch     Обработать список URL пакетом и вывести/сохранить отчёт
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда batch опции:
  --concurrency INT   Сколько сайтов обрабатывать одновременно (override concurrency)
  --json PATH         Сохранить JSON-отчёт в файл
  --pretty            Преформатировать JSON-вывод (отступ 2)

Дополнительно:
  --version, -v       Показать версию PrivacyScout

Пример:
  privacy-scout batch sites.txt --concurrency 10 --json report.json
"""
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

import click

from privacy_scout import __version__
from privacy_scout.config import load_config
from privacy_scout.engine import discover_one
from privacy_scout.logger import DEFAULT_FORMAT, init_logging
from privacy_scout.report.json_report import render_json
from privacy_scout.scanner import run_batch

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def read_targets(path: Path) -> List[Dict[str, Any]]:
    """Читает список сайтов: JSON-массив записей/строк или текст, один URL на строку."""
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
        if not isinstance(data, list):
            raise ValueError(f"Ожидался JSON-массив в {path}, получено {type(data).__name__}")
        return [item if isinstance(item, dict) else {"url": item} for item in data]
    return [
        {"url": line.strip()}
        for line in text.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    ]


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='PrivacyScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд PrivacyScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('discover', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.pass_context
def discover(ctx, url, pretty):
    """Найти privacy-страницу и адреса для одного URL."""
    cfg = ctx.obj['config']
    try:
        result = asyncio.run(discover_one(url, cfg))
    except Exception as e:
        print_error(f'Ошибка при поиске: {e}')
    click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2 if pretty else None))


@cli.command('batch', context_settings=CONTEXT_SETTINGS)
@click.argument('targets', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--concurrency', '-n', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Сколько сайтов обрабатывать одновременно (override concurrency)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.pass_context
def batch(ctx, targets, concurrency, json_output, pretty):
    """Обработать список сайтов пакетом и сгенерировать отчёт."""
    cfg = ctx.obj['config']
    if concurrency is not None:
        cfg = cfg.model_copy(update={'concurrency': concurrency})

    try:
        items = read_targets(targets)
    except (ValueError, OSError) as e:
        print_error(f'Ошибка чтения списка сайтов: {e}')

    try:
        report = asyncio.run(run_batch(cfg, items))
    except Exception as e:
        print_error(f'Ошибка при пакетной обработке: {e}')

    if json_output:
        try:
            saved = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')
        return

    click.echo(report.json(pretty=pretty))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
