#!/usr/bin/env python3
"""
CLI do transfill: encontra chaves sem traducao e preenche via tradutor externo.

Uso:
  transfill missing fr
  transfill save-missing             # Todos os idiomas
  transfill auto-translate fr --provider mymemory
  transfill serve --port 5000
"""

import argparse
import json
import sys

from transfill import config
from transfill.differ import count_keys


def _print_json(data):
    print(json.dumps(data, ensure_ascii=False, indent=2))


def _print_report(language, report):
    if report.skipped:
        print(f"⏭️  {language}: idioma de origem, nada a traduzir")
        return

    print(f"✅ Traducao automatica concluida: {language} "
          f"({report.translated} traduzidas, {len(report.failures)} falhas, "
          f"{len(report.mismatches)} divergencias de placeholder)")


def cmd_languages(service, args):
    languages = service.all_languages()
    if not languages:
        print("❌ Nenhum idioma encontrado.")
        return 0
    for code, name in languages.items():
        marker = ' (origem)' if code == service.source_language else ''
        print(f"  {code}  {name}{marker}")
    return 0


def cmd_add_language(service, args):
    try:
        service.add_language(args.language, args.name)
    except ValueError as e:
        print(f"❌ ERRO: {e}")
        return 1
    print(f"✅ Idioma criado: {args.language}")
    return 0


def cmd_add(service, args):
    event = service.add_translation(
        args.language, args.key, args.value or '',
        group=args.group, namespace=args.namespace,
    )
    print(f"✅ {event.language} [{event.group}] {event.key} = {event.value!r}")
    return 0


def cmd_missing(service, args):
    if args.include_empty:
        result = service.find_untranslated_translations(args.language)
    else:
        result = service.find_missing_translations(args.language)
    _print_json(result)
    print(f"\n📊 {count_keys(result)} chaves faltando em {args.language}", file=sys.stderr)
    return 0


def cmd_save_missing(service, args):
    saved = service.save_missing_translations(args.language)
    print(f"✅ {saved} chaves faltando salvas")
    return 0


def cmd_translate(service, args):
    report = service.translate_language(args.language)
    _print_report(args.language, report)
    return 0


def cmd_auto_translate(service, args):
    service.auto_translate(args.language, notify=_print_report)
    return 0


def cmd_serve(service, args):
    from transfill.app import create_app, socketio

    app = create_app(service)
    socketio.run(app, host=args.host, port=args.port, allow_unsafe_werkzeug=True)
    return 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='transfill',
        description='Encontra chaves de traducao faltando e traduz automaticamente.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exemplos:
  # Chaves usadas no codigo e ausentes em frances
  %(prog)s missing fr

  # Criar entradas vazias e traduzir tudo (todos os idiomas)
  %(prog)s auto-translate

  # Adicionar traducao de grupo com namespace
  %(prog)s add fr welcome "Bonjour :name" --group messages --namespace auth
"""
    )

    storage = parser.add_argument_group('armazenamento')
    storage.add_argument('--driver', choices=('file', 'database'),
                         help=f'Driver de armazenamento (padrao: {config.DRIVER})')
    storage.add_argument('--lang-path', help='Diretorio dos arquivos de traducao (driver file)')
    storage.add_argument('--db-path', help='Arquivo SQLite (driver database)')

    translation = parser.add_argument_group('traducao')
    translation.add_argument('--source-lang',
                             help=f'Idioma de origem (padrao: {config.SOURCE_LANG})')
    translation.add_argument('--provider',
                             help=f'Provider de traducao (padrao: {config.TRANSLATE_PROVIDER})')
    translation.add_argument('--scan-path', action='append', dest='scan_paths',
                             help='Diretorio a varrer por chaves (pode repetir)')

    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('languages', help='Lista os idiomas')
    p.set_defaults(func=cmd_languages)

    p = sub.add_parser('add-language', help='Cria um idioma')
    p.add_argument('language')
    p.add_argument('--name')
    p.set_defaults(func=cmd_add_language)

    p = sub.add_parser('add', help='Adiciona ou altera uma traducao')
    p.add_argument('language')
    p.add_argument('key')
    p.add_argument('value', nargs='?', default='')
    p.add_argument('--group', help='Grupo (sem grupo: traducao avulsa)')
    p.add_argument('--namespace')
    p.set_defaults(func=cmd_add)

    p = sub.add_parser('missing', help='Mostra chaves do codigo sem traducao')
    p.add_argument('language')
    p.add_argument('--include-empty', action='store_true',
                   help='Conta valores vazios como faltando')
    p.set_defaults(func=cmd_missing)

    p = sub.add_parser('save-missing', help='Cria entradas vazias para chaves faltando')
    p.add_argument('language', nargs='?')
    p.set_defaults(func=cmd_save_missing)

    p = sub.add_parser('translate', help='Traduz os valores vazios de um idioma')
    p.add_argument('language')
    p.set_defaults(func=cmd_translate)

    p = sub.add_parser('auto-translate', help='save-missing + translate por idioma')
    p.add_argument('language', nargs='?')
    p.set_defaults(func=cmd_auto_translate)

    p = sub.add_parser('serve', help='Sobe a API web')
    p.add_argument('--host', default='127.0.0.1')
    p.add_argument('--port', type=int, default=5000)
    p.set_defaults(func=cmd_serve)

    return parser.parse_args(argv)


def main(argv=None, service=None):
    args = parse_args(argv)

    if service is None:
        from transfill.service import create_service
        service = create_service(
            driver=args.driver,
            lang_path=args.lang_path,
            db_path=args.db_path,
            source_language=args.source_lang,
            provider=args.provider,
            scan_paths=args.scan_paths,
        )

    return args.func(service, args)


if __name__ == '__main__':
    sys.exit(main())
