# yomilex/main.py
import argparse
import dataclasses
import json
import logging
import sys

from yomilex.config.config import config, APP_NAME, APP_VERSION, MAX_SCAN_LENGTH
from yomilex.dictionary.grouping import group_results
from yomilex.dictionary.lookup import Lookup
from yomilex.dictionary.registry import DictionaryRegistry
from yomilex.dictionary.store import TrieTermStore
from yomilex.language.languages import Deinflector, Language
from yomilex.utils.logger import setup_logging

logger = logging.getLogger(__name__)


def _language(value: str) -> Language:
    try:
        return Language(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"unknown language code '{value}'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=APP_NAME, description=f"{APP_NAME} dictionary lookup")
    parser.add_argument('--version', action='version', version=f"{APP_NAME} {APP_VERSION}")
    parser.add_argument('--log-level', type=str, help="overrides log_level from config.ini")
    commands = parser.add_subparsers(dest='command', required=True)

    lookup = commands.add_parser('lookup', help="look up the word at a position in TEXT")
    lookup.add_argument('text')
    lookup.add_argument('--index', type=int, default=0, help="UTF-8 byte offset of the cursor")
    lookup.add_argument('--language', type=_language)
    lookup.add_argument('--store', type=str, help="path to the term store")
    lookup.add_argument('--max-length', type=int, default=MAX_SCAN_LENGTH)
    lookup.add_argument('--flat', action='store_true', help="one result per dictionary entry")

    deinflect = commands.add_parser('deinflect', help="print every deinflection of TEXT with its trace")
    deinflect.add_argument('text')
    deinflect.add_argument('--language', type=_language)

    dictionaries = commands.add_parser('dictionaries', help="list or edit installed dictionaries")
    actions = dictionaries.add_subparsers(dest='action', required=True)
    actions.add_parser('list')
    toggle = actions.add_parser('toggle')
    toggle.add_argument('id', type=int)
    toggle.add_argument('state', choices=['on', 'off'])
    reorder = actions.add_parser('reorder')
    reorder.add_argument('ids', type=int, nargs='+')
    delete = actions.add_parser('delete')
    delete.add_argument('id', type=int)
    return parser


def _selected_language(args) -> Language:
    if args.language:
        return args.language
    try:
        return Language(config.language)
    except ValueError:
        logger.warning(f"Unknown language '{config.language}' in config.ini, using Japanese.")
        return Language.JAPANESE


def _print_json(data):
    json.dump(data, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write('\n')


def run_lookup(args) -> int:
    language = _selected_language(args)
    registry = DictionaryRegistry.load(config.dictionaries_path)
    store = TrieTermStore(args.store or config.store_path)
    lookup = Lookup(registry)
    entries = lookup.search(store, args.text, args.index, language, max_length=args.max_length)
    grouped = config.group_results and not args.flat
    results = group_results(entries, registry.names(), grouped=grouped)
    _print_json([dataclasses.asdict(result) for result in results])
    return 0


def run_deinflect(args) -> int:
    language = _selected_language(args)
    transformer = Deinflector().transformer(language)
    _print_json([
        {'text': item.text, 'conditions': item.conditions, 'reasons': item.reasons}
        for item in transformer.transform_with_trace(args.text)
    ])
    return 0


def run_dictionaries(args) -> int:
    registry = DictionaryRegistry.load(config.dictionaries_path)
    if args.action == 'toggle':
        changed = registry.toggle(args.id, args.state == 'on')
    elif args.action == 'delete':
        changed = registry.delete(args.id)
    elif args.action == 'reorder':
        registry.reorder(args.ids)
        changed = True
    else:
        changed = False

    if args.action != 'list':
        if not changed:
            logger.error(f"No dictionary with id {args.id}.")
            return 1
        registry.save(config.dictionaries_path)
    _print_json([dataclasses.asdict(info) for info in registry.list()])
    return 0


COMMANDS = {
    'lookup': run_lookup,
    'deinflect': run_deinflect,
    'dictionaries': run_dictionaries,
}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    # JSON goes to stdout, so logs go to stderr
    setup_logging(args.log_level or config.log_level, stream=sys.stderr)
    try:
        return COMMANDS[args.command](args)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1


if __name__ == '__main__':
    sys.exit(main())
