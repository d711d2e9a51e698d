#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Interactive command loop over a network.

Commands are read one per line::

    earliest_occurence_of <event>
    latest_occurence_of <event>
    earliest_finish_of <trigger> <completion>
    latest_start_of <trigger> <completion>
    activity_float_of <trigger> <completion>
    free_float_of <trigger> <completion>
    interfering_float_of <trigger> <completion>
    independent_float_of <trigger> <completion>
    critical_path
    paths <start> <finish>
    help
    q
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
import logging
import sys

from .errors import NetworkError
from .net_model import Activity
from .report import format_path
from .txt_io import parse_event

logger = logging.getLogger(__name__)

QUIT = 'q'

#==============================================================================
class _UsageError(NetworkError):
    """Malformed shell command."""

#==============================================================================
class Shell:
    """
    Line oriented command interpreter.

    Parameters
    ----------
    net : NetworkModel
        Network to query
    stdin, stdout : file-like, optional
        Command source and answer sink, ``sys.stdin``/``sys.stdout`` by default
    event_type : callable
        Event token parser
    """

    # command: (method, label)
    EVENT_COMMANDS = {
        'earliest_occurence_of': ('earliest_occurence', 'Earliest occurence of event'),
        'latest_occurence_of'  : ('latest_occurence',   'Latest occurence of event'),
    }

    ACTIVITY_COMMANDS = {
        'earliest_finish_of'  : ('earliest_finish',   'Earliest finish of activity'),
        'latest_start_of'     : ('latest_start',      'Latest start of activity'),
        'activity_float_of'   : ('activity_float',    'Activity float of activity'),
        'free_float_of'       : ('free_float',        'Free float of activity'),
        'interfering_float_of': ('interfering_float', 'Interfering float of activity'),
        'independent_float_of': ('independent_float', 'Independent float of activity'),
    }

    def __init__(self, net, stdin=None, stdout=None, event_type=parse_event):
        self.net = net
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.event_type = event_type

    def _print(self, text=''):
        self.stdout.write(text + '\n')

    #--------------------------------------------------------------------------
    def execute(self, line):
        """
        Execute a single command line.

        Returns
        -------
        bool
            False when the loop must stop
        """
        tokens = line.split()
        if not tokens:
            return True

        cmd, args = tokens[0], tokens[1:]
        if QUIT == cmd:
            return False

        try:
            self._dispatch(cmd, args)
        except NetworkError as e:
            logger.debug('Command %r failed: %s', line, e)
            self._print('Error: %s' % e)
        return True

    def _events(self, cmd, args, n):
        if n != len(args):
            raise _UsageError('%s expects %d event(s)' % (cmd, n))
        return [self.event_type(t) for t in args]

    def _dispatch(self, cmd, args):
        if cmd in self.EVENT_COMMANDS:
            method, label = self.EVENT_COMMANDS[cmd]
            e, = self._events(cmd, args, 1)
            self._print('%s %s: %s' % (label, e, getattr(self.net, method)(e)))

        elif cmd in self.ACTIVITY_COMMANDS:
            method, label = self.ACTIVITY_COMMANDS[cmd]
            a = Activity(*self._events(cmd, args, 2))
            self._print('%s %s ---> %s: %s' % (label, a.trigger, a.completion,
                                               getattr(self.net, method)(a)))

        elif 'critical_path' == cmd:
            for a, duration in self.net.find_critical_path():
                self._print('%s--->%s  : %s' % (a.trigger, a.completion, duration))

        elif 'paths' == cmd:
            start, finish = self._events(cmd, args, 2)
            for path in self.net.paths(start, finish):
                self._print(format_path(path))

        elif 'help' == cmd:
            self._print(__doc__.split('::', 1)[1].strip('\n'))

        else:
            raise _UsageError('Unknown command %r, type "help"' % cmd)

    #--------------------------------------------------------------------------
    def run(self):
        """Read and execute commands until ``q`` or end of input."""
        for line in self.stdin:
            if not self.execute(line):
                break
            self._print()
