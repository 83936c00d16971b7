# === FILE: script_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа ScriptScout для командной строки.

Команды:
  scan ROOT_URL     Обойти сайт, собрать инвентарь скриптов и вывести/сохранить отчёты
  config ROOT_URL   Показать итоговую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (по умолчанию configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда scan опции:
  --max-pages, -m INT Макс. число страниц (положительное, по умолчанию 10)
  --concurrency INT   Одновременных запросов к сайту
  --no-metrics        Не считать метрики скриптов
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблонами (по умолчанию встроенный шаблон)
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --scan-timeout SEC  Таймаут всего сканирования (секунд)

Дополнительно:
  --version, -v       Показать версию ScriptScout

Пример:
  script-scout scan https://example.com --max-pages 50 --json report.json --html report.html
"""
import asyncio
import sys
from pathlib import Path

import click

from script_scout import __version__
from script_scout.config import load_config
from script_scout.engine import start_scan
from script_scout.logger import DEFAULT_FORMAT, init_logging, logger
from script_scout.report.html_report import render_html
from script_scout.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _build_config(ctx, root_url, **overrides):
    try:
        return load_config(ctx.obj['config_path'], root_url=root_url, **overrides)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='ScriptScout, version %(version)s')
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
    help='Путь к файлу логов (только stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """ScriptScout: инвентаризация JavaScript на сайте."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
        stream='stderr',
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('scan', context_settings=CONTEXT_SETTINGS)
@click.argument('root_url')
@click.option(
    '--max-pages', '-m', 'max_pages',
    type=click.IntRange(min=1),
    default=None,
    help='Макс. число страниц для обхода (по умолчанию 10)'
)
@click.option(
    '--concurrency', 'concurrency',
    type=click.IntRange(min=1, max=32),
    default=None,
    help='Одновременных запросов к сайту (по умолчанию 1)'
)
@click.option(
    '--no-metrics', 'no_metrics', is_flag=True,
    help='Не скачивать и не анализировать скрипты'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблонами (нужен report.html.j2)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.option(
    '--scan-timeout', 'scan_timeout',
    type=float,
    default=None,
    help='Таймаут всего сканирования (секунд)'
)
@click.pass_context
def scan(ctx, root_url, max_pages, concurrency, no_metrics, json_output, html_output,
         template_dir, pretty, scan_timeout):
    """Обойти сайт начиная с ROOT_URL и построить инвентарь скриптов."""
    cfg = _build_config(
        ctx,
        root_url,
        max_pages=max_pages,
        concurrency=concurrency,
        analyze_scripts=False if no_metrics else None,
    )
    logger.info('Starting scan: %s', cfg.root_url)
    try:
        if scan_timeout:
            report = asyncio.run(
                asyncio.wait_for(start_scan(cfg), timeout=scan_timeout)
            )
        else:
            report = asyncio.run(start_scan(cfg))
    except asyncio.TimeoutError:
        print_error(f'Сканирование не завершено за {scan_timeout} секунд')
    except Exception as e:
        print_error(f'Ошибка при сканировании: {e}')

    # Если не сохраняем в файл — печатаем в stdout
    if not json_output and not html_output:
        click.echo(report.json(pretty=pretty))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.argument('root_url')
@click.pass_context
def show_config(ctx, root_url):
    """Показать итоговую конфигурацию в JSON."""
    cfg = _build_config(ctx, root_url)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
