#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Text network format
===================

::

    <initial_time>
    <terminal_time>
    <trigger_event> <completion_event> <duration>
    ...

Times and durations are integers or floats, events are integers or any other
whitespace free token. Blank lines are skipped and ``#`` starts a comment.
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
import os

from .errors import NetworkParseError, NotScheduledError
from .net_model import NetworkModel

logger = logging.getLogger(__name__)

#==============================================================================
def parse_scalar(token):
    """Parse a time or duration literal: int first, then float."""
    try:
        return int(token)
    except ValueError:
        return float(token)

def parse_event(token):
    """Parse an event id: int when possible, the raw token otherwise."""
    try:
        return int(token)
    except ValueError:
        return token

#==============================================================================
def _lines(text):
    """Yield (lineno, line) pairs of meaningful lines."""
    for lineno, line in enumerate(text.splitlines(), 1):
        line = line.split('#', 1)[0].strip()
        if line:
            yield lineno, line

#==============================================================================
def from_txt(text, strict=False, debug=False,
             event_type=parse_event, duration_type=parse_scalar):
    """
    Build a scheduled network from its text representation.

    Parameters
    ----------
    text : str
        Network text
    strict, debug : bool
        Passed to :class:`NetworkModel`
    event_type : callable
        Event token parser
    duration_type : callable
        Time and duration token parser

    Returns
    -------
    NetworkModel
        Network scheduled with the two header values

    Raises
    ------
    NetworkParseError
        On a missing header or a malformed line
    """
    lines = _lines(text)
    header = []
    for lineno, line in lines:
        try:
            header.append(duration_type(line))
        except ValueError:
            raise NetworkParseError('Bad schedule time', lineno, line) from None
        if 2 == len(header):
            break
    else:
        raise NetworkParseError('Expected initial and terminal time header lines')

    net = NetworkModel(strict=strict, debug=debug)
    net.schedule(*header)

    # Events of one network must be mutually ordered
    event_kind = None

    for lineno, line in lines:
        tokens = line.split()
        if 3 != len(tokens):
            raise NetworkParseError('Expected "<trigger> <completion> <duration>"',
                                    lineno, line)
        try:
            trigger    = event_type(tokens[0])
            completion = event_type(tokens[1])
            duration   = duration_type(tokens[2])
        except ValueError:
            raise NetworkParseError('Bad activity field', lineno, line) from None

        for e in (trigger, completion):
            if event_kind is None:
                event_kind = type(e)
            elif type(e) is not event_kind:
                raise NetworkParseError('Event %r is not a %s like the previous events'
                                        % (e, event_kind.__name__), lineno, line)

        net.add_activity(trigger, completion, duration)

    logger.debug('Parsed network with %d activities', len(net))
    return net

#==============================================================================
def _event_token(e):
    token = '%s' % (e,)
    if '#' in token or token.split() != [token]:
        raise NetworkParseError('Event %r has no text representation' % (e,))
    return token

def to_txt(net):
    """
    Text representation of a scheduled network, inverse of :func:`from_txt`.

    Raises
    ------
    NotScheduledError
        When the network has no schedule to write in the header
    NetworkParseError
        When an event prints empty, with whitespace or with ``#`` and
        would not read back as the same event
    """
    if not net.is_scheduled:
        raise NotScheduledError('Network must be scheduled to be written as text')
    out = ['%s' % (net.initial_time,), '%s' % (net.terminal_time,)]
    for a in net:
        out.append('%s %s %s' % (_event_token(a.trigger), _event_token(a.completion),
                                 net.estimated_duration(a)))
    return '\n'.join(out) + '\n'

#==============================================================================
def load_network(path, **kwargs):
    """Read a network from a text file."""
    path = os.fspath(path)
    logger.debug('Loading network from %s', path)
    with open(path, 'r', encoding='utf-8') as f:
        return from_txt(f.read(), **kwargs)

def save_network(net, path):
    """Write a network to a text file."""
    path = os.fspath(path)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(to_txt(net))
