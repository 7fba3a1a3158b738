#!/usr/bin/env python3
"""
Точка входа SiteBinder: обойти сайт и собрать статьи в один PDF.

Опции (одиночный дефис, как в исходном инструменте; ``--`` тоже работает):
  -url URL            Стартовый URL (обязательно)
  -depth INT          Максимальная глубина обхода (default: 2)
  -output PATH        Итоговый PDF (default: output.pdf; .pdf добавляется)
  -timeout SEC        Таймаут всего обхода (default: 300)

Дополнительно:
  --config PATH       YAML/JSON с любыми полями BinderConfig
  --json PATH         Сохранить собранные страницы в JSON
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout всегда включён)
  --version, -v       Показать версию SiteBinder

Пример:
  site-binder -url https://go.dev/blog -depth 1 -output out/blog
"""
import sys
from pathlib import Path

import click

from site_binder import __version__
from site_binder.config import build_config
from site_binder.engine import Engine
from site_binder.exceptions import ConfigurationError, SiteBinderError
from site_binder.logger import PLAIN_FORMAT, init_logging

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteBinder, version %(version)s')
@click.option('-url', '--url', 'url', default='', help='Стартовый URL для обхода (обязательно).')
@click.option('-depth', '--depth', 'depth', type=int, default=None, help='Максимальная глубина обхода ссылок [default: 2]')
@click.option('-output', '--output', 'output', default=None, help='Имя итогового PDF [default: output.pdf]')
@click.option('-timeout', '--timeout', 'timeout', type=int, default=None, help='Таймаут всего обхода, секунд [default: 300]')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к YAML/JSON конфигу; флаги командной строки имеют приоритет.'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Сохранить собранные страницы в JSON-файл'
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
    type=click.Path(dir_okay=False, path_type=Path),
    help='Путь к файлу логов (дополнительно к stdout)'
)
@click.option(
    '--log-format', 'log_format',
    default=PLAIN_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
def cli(url, depth, output, timeout, config_path, json_output, log_level, log_file, log_format):
    """Обойти сайт и собрать найденные статьи в PDF с оглавлением."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    if not url and config_path is None:
        print_error('Please provide a URL using the -url flag')
    try:
        cfg = build_config(
            config_path,
            base_url=url or None,
            max_depth=depth,
            output=output,
            crawl_timeout=timeout,
        )
    except ConfigurationError as e:
        print_error(f'Invalid URL or configuration: {e.message}')

    engine = Engine(cfg)
    try:
        result = engine.crawl()
    except SiteBinderError as e:
        print_error(e.message)

    click.echo(f'\nScraped {len(result.pages)} pages successfully.')

    if json_output:
        try:
            saved_json = engine.export_json(result, json_output)
        except SiteBinderError as e:
            print_error(e.message)
        click.echo(f'JSON report: {saved_json}')

    try:
        document = engine.assemble(result)
        saved_pdf = engine.render(document)
    except SiteBinderError as e:
        print_error(e.message)

    click.echo(f'PDF generated successfully with {len(document)} pages!')
    click.echo(f'PDF report: {saved_pdf}')


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
