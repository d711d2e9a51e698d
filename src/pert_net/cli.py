#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
``pert-net`` command line tool.

Usage::

    pert-net show network.txt
    pert-net shell network.txt
    pert-net critical network.txt
    pert-net paths network.txt 1 9
    pert-net export network.txt --activities act.csv --events evt.csv
    pert-net viz network.txt -o network
"""

#==============================================================================
"""
    PertNet
    Copyright (C) 2025 anonimous

    This program is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This program is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
    GNU General Public License for more details.

    You should have received a copy of the GNU General Public License
    along with this program.  If not, see <http://www.gnu.org/licenses/>.

    Please contact with me by E-mail: shkolnick.kun@gmail.com
"""

#==============================================================================
import argparse
import logging
import sys

from .errors import NetworkError
from .report import (format_network, format_path, format_schedule,
                     to_dataframe, viz)
from .shell import Shell
from .txt_io import load_network, parse_event

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

#==============================================================================
def _cmd_show(net, args):
    print(format_network(net))
    if net.is_well_formed():
        print(format_schedule(net))
    return 0

def _cmd_shell(net, args):
    print(format_network(net))
    Shell(net).run()
    return 0

def _cmd_critical(net, args):
    for a, duration in net.find_critical_path():
        print('%s--->%s  : %s' % (a.trigger, a.completion, duration))
    return 0

def _cmd_paths(net, args):
    for path in net.paths(parse_event(args.start), parse_event(args.finish)):
        print(format_path(path))
    return 0

def _cmd_export(net, args):
    activities_df, events_df = to_dataframe(net)
    if args.activities:
        activities_df.to_csv(args.activities, index=False)
    else:
        print(activities_df.to_string(index=False))
    if args.events:
        events_df.to_csv(args.events, index=False)
    else:
        print(events_df.to_string(index=False))
    return 0

def _cmd_viz(net, args):
    dot = viz(net, output_path=args.output, fmt=args.format)
    if args.output is None:
        print(dot.source)
    return 0

#==============================================================================
def build_parser():
    parser = argparse.ArgumentParser(prog='pert-net',
                                     description='Activity-on-arc PERT/CPM network analysis.')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: WARNING)')
    parser.add_argument('--strict', action='store_true',
                        help='Fail on activities whose reverse is already present')

    sub = parser.add_subparsers(dest='command', required=True)

    def _add(name, func, help):
        p = sub.add_parser(name, help=help)
        p.add_argument('network', help='Path to the network text file')
        p.set_defaults(func=func)
        return p

    _add('show', _cmd_show, 'Print the network and its schedule')
    _add('shell', _cmd_shell, 'Query the network interactively')
    _add('critical', _cmd_critical, 'Print the critical activities')

    p = _add('paths', _cmd_paths, 'Print all paths between two events')
    p.add_argument('start', help='Start event')
    p.add_argument('finish', help='Finish event')

    p = _add('export', _cmd_export, 'Export activity and event tables')
    p.add_argument('--activities', default=None, help='Activities CSV file (default: stdout)')
    p.add_argument('--events', default=None, help='Events CSV file (default: stdout)')

    p = _add('viz', _cmd_viz, 'Draw the network with Graphviz')
    p.add_argument('-o', '--output', default=None,
                   help='Output path without extension (default: print DOT source)')
    p.add_argument('--format', default='png', help='Output format (default: png)')

    return parser

#==============================================================================
def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    try:
        net = load_network(args.network, strict=args.strict)
        return args.func(net, args)
    except OSError as e:
        print('ERROR: %s' % e, file=sys.stderr)
        return 1
    except NetworkError as e:
        print('ERROR: %s' % e, file=sys.stderr)
        return 1

#==============================================================================
if __name__ == '__main__':
    sys.exit(main())
