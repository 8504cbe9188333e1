"""kiu runner — learn every author of a chat export, then guess who wrote a message.

Usage:
    python3 -m kiu.run                          # conf.json, babilejo.zip, msg.txt
    python3 -m kiu.run --config my.json         # other settings file
    python3 -m kiu.run --seed 7                 # reproducible train/test split
    python3 -m kiu.run --time 21:30             # message was sent at 21:30
    python3 -m kiu.run --no-time                # content only, ignore posting times
"""

import sys
import random
import argparse

from .config import CONFIG_PATH, ARCHIVE_PATH, MESSAGE_PATH, Settings
from .errors import KiuError, EmptyInputError
from .core import Normalizer, Pipe, train_chains, build_profiles, Scorer, evaluate
from .corpus import extract, split, read_archive
from .corpus.extract import parse_minute


def status(msg):
    print(msg, file=sys.stderr)


def read_message(path, normalizer):
    """Normalized message to attribute. Raises EmptyInputError."""
    try:
        with open(path, encoding='utf-8') as f:
            raw = f.read()
    except (OSError, UnicodeDecodeError):
        raise EmptyInputError(f'message file {path} does not exist or is unreadable')
    if not raw.strip():
        raise EmptyInputError(f'message file {path} is empty')
    text = normalizer.normalize(raw)
    if not text:
        raise EmptyInputError(f'message file {path} holds nothing after cleaning')
    return text


def format_ranking(log_ranking, registry):
    """One line per author: natural log probability, then display name."""
    lines = []
    for log_p, author_id in log_ranking:
        lines.append(f'{log_p:9.4f} {registry.name_of(author_id)}')
    return lines


def build_pipe(settings, rng, use_time=True):
    """Stages from raw markup to a trained, evaluated scorer.

    Data flows as a dict; each stage adds its products.
    """
    def extract_stage(state):
        docs, registry, histograms = extract(state['markup'], settings)
        return {**state, 'documents': docs, 'registry': registry, 'histograms': histograms}

    def profile_stage(state):
        profiles = None
        if use_time:
            profiles = build_profiles(state['histograms'], state['registry'], settings.time_half_window)
        return {**state, 'profiles': profiles}

    def split_stage(state):
        train, test = split(state['documents'], settings.test_fraction, rng)
        return {**state, 'train': train, 'test': test}

    def train_stage(state):
        chains = train_chains(state['train'], len(state['registry']), settings.word_mode)
        scorer = Scorer.from_settings(chains, state['profiles'], settings)
        return {**state, 'scorer': scorer}

    def evaluate_stage(state):
        accuracy = evaluate(state['scorer'], state['test'], settings.word_mode)
        return {**state, 'accuracy': accuracy}

    return (
        Pipe(on_stage=lambda name: status(f'{name}...'))
        .add('extracting corpus', extract_stage,
             lambda s: f"{len(s['documents'])} documents from {len(s['registry'])} authors")
        .add('profiling posting times', profile_stage,
             lambda s: 'skipped' if s['profiles'] is None else f"{len(s['registry'])} profiles")
        .add('splitting corpus', split_stage,
             lambda s: f"{len(s['train'])} train / {len(s['test'])} test")
        .add('training chains', train_stage,
             lambda s: f"{s['scorer'].n_authors} chains")
        .add('evaluating', evaluate_stage,
             lambda s: f"accuracy {s['accuracy']:.4f}")
    )


def run(args):
    status('loading configuration...')
    settings = Settings.load(args.config)
    normalizer = Normalizer.from_settings(settings)

    message = read_message(args.message, normalizer)

    status('loading archive...')
    markup = read_archive(args.archive, settings.start_page, settings.last_page)

    rng = random.Random(args.seed)
    pipe = build_pipe(settings, rng, use_time=not args.no_time)
    state = pipe.run({'markup': markup})
    for entry in pipe.log:
        status(f"  {entry['stage']}: {entry['output']} ({entry['elapsed']:.2f}s)")

    if not state['test']:
        status('empty test set, accuracy reported as 0')
    status(f"accuracy: {state['accuracy'] * 100:.2f}%")

    scorer, registry = state['scorer'], state['registry']
    if scorer.n_authors == 0:
        status('no author passed probation, nothing to rank')
        return 0
    ranking = scorer.predict(message, settings.word_mode, args.minute)
    for line in format_ranking(ranking, registry):
        print(line)
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description='kiu — chat message authorship attribution')
    parser.add_argument('--config', default=str(CONFIG_PATH),
                        help=f'settings JSON file (default: {CONFIG_PATH})')
    parser.add_argument('--archive', default=str(ARCHIVE_PATH),
                        help=f'chat export zip (default: {ARCHIVE_PATH})')
    parser.add_argument('--message', default=str(MESSAGE_PATH),
                        help=f'file with the message to attribute (default: {MESSAGE_PATH})')
    parser.add_argument('--seed', type=int, default=None,
                        help='random seed for the train/test split')
    parser.add_argument('--time', default=None,
                        help='HH:MM the message was sent, adds posting-time evidence')
    parser.add_argument('--no-time', action='store_true',
                        help='ignore posting times entirely')
    args = parser.parse_args(argv)

    args.minute = None
    if args.time is not None:
        args.minute = parse_minute(args.time)
        if args.minute is None:
            parser.error(f'--time must be HH:MM, got {args.time!r}')

    try:
        return run(args)
    except KiuError as e:
        print(f'error: {e}', file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
