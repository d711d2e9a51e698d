#!/usr/bin/env python3
# -*- coding: utf-8 -*-
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
class NetworkError(Exception):
    """Base class for all network model errors."""

#==============================================================================
class MissingActivityError(NetworkError, KeyError):
    """The activity is not a part of the network."""
    def __init__(self, activity):
        super().__init__(activity)
        self.activity = activity

    def __str__(self):
        return 'No activity %s--->%s in the network' % tuple(self.activity)

#==============================================================================
class UnknownEventError(NetworkError, KeyError):
    """The event is not an endpoint of any activity of the network."""
    def __init__(self, event):
        super().__init__(event)
        self.event = event

    def __str__(self):
        return 'No event %r in the network' % (self.event,)

#==============================================================================
class MalformedNetworkError(NetworkError, ValueError):
    """
    The network can not be scheduled: several initial or terminal events,
    an event without predecessors or a directed cycle.
    """

#==============================================================================
class NotScheduledError(NetworkError, RuntimeError):
    """Time query on a network without initial and terminal times."""

#==============================================================================
class ReverseActivityError(NetworkError, ValueError):
    """The reverse activity is already present in the network."""
    def __init__(self, activity):
        super().__init__(activity)
        self.activity = activity

    def __str__(self):
        return 'Activity %s--->%s conflicts with its reverse' % tuple(self.activity)

#==============================================================================
class NetworkParseError(NetworkError, ValueError):
    """
    Text network format error.

    Parameters
    ----------
    message : str
        What went wrong
    lineno : int
        1-based number of the offending line
    line : str
        The offending line itself
    """
    def __init__(self, message, lineno=None, line=None):
        super().__init__(message)
        self.message = message
        self.lineno = lineno
        self.line = line

    def __str__(self):
        if self.lineno is None:
            return self.message
        return 'line %d: %s: %r' % (self.lineno, self.message, self.line)
