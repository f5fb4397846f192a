# Launcher: python -m nodelog.logviewer [FILE ...]
# Opens a LogViewer window, optionally pre-loaded with log files or the sample log

import argparse
import sys

import nodelog
from nodelog import qt
from .constants import DEFAULT_FETCH_LIMIT, DEFAULT_TIME_WINDOW_NS
from .viewer import LogViewer


def make_parser():
    parser = argparse.ArgumentParser(
        prog='python -m nodelog.logviewer',
        description='Browse newline-delimited JSON logs from several nodes side by side',
    )
    parser.add_argument('files', nargs='*', help='log files to import (concatenated)')
    parser.add_argument('--sample', action='store_true', help='load the built-in sample log')
    parser.add_argument('--time-window', type=int, default=DEFAULT_TIME_WINDOW_NS,
                        help='largest gap in nanoseconds between records in one row')
    parser.add_argument('--limit', type=int, default=DEFAULT_FETCH_LIMIT,
                        help='number of matching records loaded at a time')
    parser.add_argument('--log', nargs='?', default=None, const='DEBUG',
                        help='enable logging to stderr at the specified level')
    return parser


def main(argv=None):
    args = make_parser().parse_args(argv)
    if args.log is not None:
        nodelog.basic_config(args.log.upper())

    app = qt.make_qapp()
    viewer = LogViewer(time_window=args.time_window, fetch_limit=args.limit)
    viewer.setWindowTitle('nodelog')
    viewer.show()

    if args.files:
        viewer.load_files(args.files)
    elif args.sample:
        viewer.load_sample()

    return app.exec()


if __name__ == '__main__':
    sys.exit(main())
