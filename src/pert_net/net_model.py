#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
PertNet - activity-on-arc PERT/CPM network analysis
===================================================

This module provides the activity-on-arc project network model and the
scheduling metrics computed over it.

Features
--------
- Graph queries: initial/terminal events, incoming/outgoing activities
- Forward pass (earliest occurrence times) and backward pass (latest
  occurrence times) in topological order
- Activity floats: activity, free, interfering and independent float
- Well-formedness check with loop detection
- Enumeration of all simple paths between two events
- Critical path and sub-network extraction

Classes
-------
- :class:`Activity`: an ordered pair of events
- :class:`NetworkModel`: the network itself

Usage Example
-------------
>>> net = NetworkModel()
>>> net.add_activity(1, 2, 1)
True
>>> net.add_activity(1, 3, 6)
True
>>> net.add_activity(2, 4, 1)
True
>>> net.add_activity(3, 4, 1)
True
>>> net.schedule(0, 7)
>>> net.earliest_occurence(4)
7
>>> [a for a, _ in net.find_critical_path()]
[1--->3, 3--->4]
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
from collections import namedtuple
import logging

import numpy as np

from .errors import (MalformedNetworkError, MissingActivityError,
                     NotScheduledError, ReverseActivityError,
                     UnknownEventError)

logger = logging.getLogger(__name__)

# Rounding error of a single float operation
EPS = np.finfo(float).eps

#==============================================================================
def _zero_like(value):
    """Additive zero of the value type (works for int, float, timedelta...)"""
    return value - value

#==============================================================================
class Activity(namedtuple('Activity', ['trigger', 'completion'])):
    """
    Activity of the network: a task running from its trigger event to its
    completion event.

    Two activities are equal when both endpoints match, ordering is
    lexicographic on ``(trigger, completion)``.
    """
    __slots__ = ()

    def reverse(self):
        """Activity with swapped endpoints."""
        return Activity(self.completion, self.trigger)

    def precedes(self, event):
        return self.completion == event

    def follows(self, event):
        return self.trigger == event

    def __repr__(self):
        return '%r--->%r' % (self.trigger, self.completion)

#==============================================================================
def _as_activity(activity, completion=None):
    """Accept an Activity, a (trigger, completion) pair or two events."""
    if completion is not None:
        return Activity(activity, completion)
    if isinstance(activity, Activity):
        return activity
    trigger, completion = activity
    return Activity(trigger, completion)

#==============================================================================
class NetworkModel:
    """
    Activity-on-arc project network.

    Parameters
    ----------
    activities : mapping or iterable, optional
        Initial activities: a ``{(trigger, completion): duration}`` mapping
        or an iterable of ``((trigger, completion), duration)`` segments
    initial_time, terminal_time : scalar, optional
        Schedule boundaries, see :meth:`schedule`
    strict : bool
        Raise :class:`ReverseActivityError` instead of skipping activities
        whose reverse is already present
    debug : bool
        Add topological ranks (stages) to exported data

    Notes
    -----
    Time queries are computed lazily: both passes run once in topological
    order and are cached until the network is modified. The model does not
    lock; callers sharing a network between threads must serialize
    mutations themselves.
    """
    def __init__(self, activities=None, initial_time=None, terminal_time=None,
                 strict=False, debug=False):
        self.strict = strict
        self.debug  = debug

        self._data          = {}
        self._initial_time  = None
        self._terminal_time = None
        self._cache         = {}

        if activities is not None:
            items = activities.items() if hasattr(activities, 'items') else activities
            for a, duration in items:
                a = _as_activity(a)
                self.add_activity(a.trigger, a.completion, duration)

        if initial_time is not None and terminal_time is not None:
            self.schedule(initial_time, terminal_time)

    #--------------------------------------------------------------------------
    @classmethod
    def from_txt(cls, text, **kwargs):
        """Build a network from the text format, see :func:`pert_net.txt_io.from_txt`."""
        from .txt_io import from_txt
        return from_txt(text, **kwargs)

    #--------------------------------------------------------------------------
    def copy(self):
        """Independent copy of the network."""
        ret = NetworkModel(strict=self.strict, debug=self.debug)
        ret._data = dict(self._data)
        ret._initial_time  = self._initial_time
        ret._terminal_time = self._terminal_time
        return ret

    #--------------------------------------------------------------------------
    def _modified(self):
        self._cache = {}

    #==========================================================================
    # Graph primitives
    #==========================================================================
    def activities(self):
        """Set of all activities."""
        return set(self._data)

    def trigger_events(self):
        return {a.trigger for a in self._data}

    def completion_events(self):
        return {a.completion for a in self._data}

    def events(self):
        """Sorted list of all events."""
        return sorted(self.trigger_events() | self.completion_events())

    def initial_events(self):
        """Events which never complete an activity."""
        return self.trigger_events() - self.completion_events()

    def terminal_events(self):
        """Events which never trigger an activity."""
        return self.completion_events() - self.trigger_events()

    def initial_event(self):
        """
        The single initial event.

        Raises
        ------
        MalformedNetworkError
            If the network has no or several initial events
        """
        evt = self.initial_events()
        if 1 != len(evt):
            raise MalformedNetworkError(
                'The network must have exactly one initial event, got %r' % sorted(evt))
        return evt.pop()

    def terminal_event(self):
        """
        The single terminal event.

        Raises
        ------
        MalformedNetworkError
            If the network has no or several terminal events
        """
        evt = self.terminal_events()
        if 1 != len(evt):
            raise MalformedNetworkError(
                'The network must have exactly one terminal event, got %r' % sorted(evt))
        return evt.pop()

    def incoming_activities(self, event):
        return {a for a in self._data if a.precedes(event)}

    def outgoing_activities(self, event):
        return {a for a in self._data if a.follows(event)}

    def _links(self):
        """Incoming and outgoing activity lists of every event."""
        in_act  = {}
        out_act = {}
        for a in sorted(self._data):
            out_act.setdefault(a.trigger,    []).append(a)
            in_act.setdefault(a.completion,  []).append(a)
            in_act.setdefault(a.trigger,     [])
            out_act.setdefault(a.completion, [])
        return in_act, out_act

    #--------------------------------------------------------------------------
    def add_activity(self, trigger, completion, duration):
        """
        Add an activity to the network.

        Parameters
        ----------
        trigger : event
            Trigger (start) event
        completion : event
            Completion (end) event
        duration : scalar
            Estimated duration

        Returns
        -------
        bool
            True if the activity was stored, False if it was skipped because
            its reverse is already present

        Raises
        ------
        ReverseActivityError
            If the reverse activity is present and the model is strict
        """
        a = Activity(trigger, completion)
        if a.reverse() in self._data and a.reverse() != a:
            if self.strict:
                raise ReverseActivityError(a)
            logger.warning('Activity %r skipped: reverse activity %r is already present',
                           a, a.reverse())
            return False

        self._data[a] = duration
        self._modified()
        return True

    def delete_activity(self, trigger, completion=None):
        """Remove an activity, return False if it was not there."""
        a = _as_activity(trigger, completion)
        if a not in self._data:
            return False
        del self._data[a]
        self._modified()
        return True

    def estimated_duration(self, activity):
        """
        Stored duration of an activity.

        Raises
        ------
        MissingActivityError
            If the activity is not a part of the network
        """
        a = _as_activity(activity)
        try:
            return self._data[a]
        except KeyError:
            raise MissingActivityError(a) from None

    def get_duration(self, activity, default=None):
        """Stored duration of an activity or ``default``."""
        return self._data.get(_as_activity(activity), default)

    def set_estimated_duration(self, activity, duration):
        """
        Update the duration of an activity, a new activity is added with
        :meth:`add_activity` rules.
        """
        a = _as_activity(activity)
        if a in self._data:
            self._data[a] = duration
            self._modified()
            return True
        return self.add_activity(a.trigger, a.completion, duration)

    #--------------------------------------------------------------------------
    def schedule(self, initial_time, terminal_time):
        """Set occurrence times of the initial and terminal events."""
        self._initial_time  = initial_time
        self._terminal_time = terminal_time
        self._modified()

    @property
    def initial_time(self):
        return self._initial_time

    @property
    def terminal_time(self):
        return self._terminal_time

    @property
    def is_scheduled(self):
        return self._initial_time is not None and self._terminal_time is not None

    #==========================================================================
    # Forward and backward pass
    #==========================================================================
    def _compute_target(self, target):
        """
        Compute event values in topological order.

        Parameters
        ----------
        target : str
            What to compute: 'stage', 'early' or 'late'

        Returns
        -------
        tuple
            (events in processing order, {event: value})

        Raises
        ------
        ValueError
            If target parameter is invalid
        MalformedNetworkError
            If the pass has no single starting event or meets a cycle
        """
        in_act, out_act = self._links()

        if 'stage' == target:
            fwd      = out_act
            rev      = in_act
            act_next = 'completion'
            choice   = max
            delta    = lambda a: 1
            start    = 0
            what     = 'initial'

        elif 'early' == target:
            fwd      = out_act
            rev      = in_act
            act_next = 'completion'
            choice   = max
            delta    = lambda a: self._data[a]
            start    = self._initial_time
            what     = 'initial'

        elif 'late' == target:
            fwd      = in_act
            rev      = out_act
            act_next = 'trigger'
            choice   = min
            delta    = lambda a: -self._data[a]
            start    = self._terminal_time
            what     = 'terminal'

        else:
            raise ValueError("Unknown 'target' value!!!")

        # Count dependencies for topological sorting
        n_dep = {e: len(rev[e]) for e in rev}

        # Find starting events (no dependencies)
        evt = [e for e in sorted(n_dep) if 0 == n_dep[e]]
        if 1 != len(evt):
            raise MalformedNetworkError(
                'The network must have exactly one %s event, got %r' % (what, evt))

        values = {evt[0]: start}

        # Process events in topological order
        i = 0
        while i < len(evt):
            base_val = values[evt[i]]

            for a in fwd[evt[i]]:
                new_val  = base_val + delta(a)
                next_evt = getattr(a, act_next)

                if next_evt in values:
                    values[next_evt] = choice(values[next_evt], new_val)
                else:
                    values[next_evt] = new_val

                n_dep[next_evt] -= 1
                if 0 == n_dep[next_evt]:
                    evt.append(next_evt)

            i += 1

        if len(evt) != len(n_dep):
            stuck = sorted(e for e, n in n_dep.items() if n > 0)
            raise MalformedNetworkError('The network has a cycle through events %r' % stuck)

        logger.debug('Computed %s values for %d events', target, len(evt))
        return evt, values

    def _target(self, target):
        if target not in self._cache:
            self._cache[target] = self._compute_target(target)
        return self._cache[target]

    def _event_value(self, target, event):
        if not self.is_scheduled:
            raise NotScheduledError('Call schedule() before time queries')
        _, values = self._target(target)
        try:
            return values[event]
        except KeyError:
            raise UnknownEventError(event) from None

    #--------------------------------------------------------------------------
    def earliest_occurence(self, event):
        """
        Earliest time the event can occur.

        The initial event occurs at ``initial_time``, any other event at the
        maximum earliest finish of its incoming activities.
        """
        return self._event_value('early', event)

    def earliest_finish(self, activity):
        a = _as_activity(activity)
        duration = self.estimated_duration(a)
        return self.earliest_occurence(a.trigger) + duration

    def earliest_start(self, activity):
        a = _as_activity(activity)
        self.estimated_duration(a)
        return self.earliest_occurence(a.trigger)

    def latest_occurence(self, event):
        """
        Latest time the event can occur without delaying the project.

        The terminal event occurs at ``terminal_time``, any other event at the
        minimum latest start of its outgoing activities.
        """
        return self._event_value('late', event)

    def latest_start(self, activity):
        a = _as_activity(activity)
        duration = self.estimated_duration(a)
        return self.latest_occurence(a.completion) - duration

    def latest_finish(self, activity):
        a = _as_activity(activity)
        self.estimated_duration(a)
        return self.latest_occurence(a.completion)

    def event_slack(self, event):
        return self.latest_occurence(event) - self.earliest_occurence(event)

    def project_duration(self):
        """Shortest possible project duration."""
        return self.earliest_occurence(self.terminal_event()) - self._initial_time

    def topological_order(self):
        """Events in the order the forward pass processes them."""
        return list(self._target('stage')[0])

    def stages(self):
        """Largest number of activities on a path from the initial event, per event."""
        return dict(self._target('stage')[1])

    #==========================================================================
    # Floats
    #==========================================================================
    def activity_float(self, activity):
        """``earliest_occurence(completion) - earliest_finish``"""
        a = _as_activity(activity)
        return self.earliest_occurence(a.completion) - self.earliest_finish(a)

    def free_float(self, activity):
        """``latest_occurence(completion) - earliest_finish``"""
        a = _as_activity(activity)
        return self.latest_occurence(a.completion) - self.earliest_finish(a)

    def interfering_float(self, activity):
        """
        ``max(0, earliest_occurence(completion) - latest_occurence(trigger) - duration)``

        .. note::
            Some CPM texts call this quantity the independent float; the
            name here follows the formula, not the textbook.
        """
        a = _as_activity(activity)
        duration = self.estimated_duration(a)
        val = (self.earliest_occurence(a.completion)
               - self.latest_occurence(a.trigger) - duration)
        return max(_zero_like(val), val)

    def independent_float(self, activity):
        """
        ``free_float - activity_float``

        .. note::
            Some CPM texts call this quantity the interfering float.
        """
        a = _as_activity(activity)
        return self.free_float(a) - self.activity_float(a)

    def _is_zero(self, value):
        """Exact zero test, float values allow accumulated rounding error."""
        if isinstance(value, (float, np.floating)):
            err = EPS * sum(abs(float(d)) for d in self._data.values())
            return abs(value) <= max(err, EPS)
        return value == _zero_like(value)

    #==========================================================================
    # Well formedness, loops and paths
    #==========================================================================
    def is_well_formed(self):
        """
        True when the network has exactly one initial event, exactly one
        terminal event and no loop anywhere, so that every time query can
        be answered once the network is scheduled.

        A loop off the initial event's reach (its events all have incoming
        activities) still makes the network malformed.
        """
        ini = self.initial_events()
        ter = self.terminal_events()
        if 1 != len(ini) or 1 != len(ter):
            return False
        if self.loop_paths(ini.pop(), ter.pop()):
            return False
        try:
            self._target('stage')
        except MalformedNetworkError:
            return False
        return True

    def loop_paths(self, start, finish):
        """
        Find loops reachable from ``start`` before ``finish`` is reached.

        Returns
        -------
        list
            Event sequences; the last event of each one is already present
            earlier in the sequence
        """
        _, out_act = self._links()

        loops = []
        stack = [(start,)]
        while stack:
            path = stack.pop()
            e = path[-1]

            if e in path[:-1]:
                loops.append(list(path))
                continue

            if e == finish:
                continue

            for a in reversed(out_act.get(e, [])):
                stack.append(path + (a.completion,))

        return loops

    def paths(self, start, finish):
        """
        Enumerate all simple paths from ``start`` to ``finish``.

        Parameters
        ----------
        start, finish : event
            Path endpoints

        Returns
        -------
        list
            Paths in depth first search order, each path is a list of
            ``(activity, duration)`` segments. Empty when ``start`` equals
            ``finish`` or when either event is missing.
        """
        _, out_act = self._links()

        found = []
        stack = [(start, (), frozenset((start,)))]
        while stack:
            e, segments, visited = stack.pop()

            if segments and e == finish:
                found.append(list(segments))
                continue

            for a in reversed(out_act.get(e, [])):
                if a.completion in visited:
                    continue
                stack.append((a.completion,
                              segments + ((a, self._data[a]),),
                              visited | {a.completion}))

        return found

    #==========================================================================
    # Critical path and sub-networks
    #==========================================================================
    def find_critical_path(self):
        """
        Activities with zero free float under the tightest schedule.

        The network is copied, the copy is scheduled to finish at the
        earliest occurrence of the terminal event and every activity of the
        copy with zero free float is selected.

        Returns
        -------
        list
            ``(activity, duration)`` segments sorted by activity. When the
            network has several parallel critical chains this is the set of
            all critical activities, see :meth:`critical_chains` for the
            walkable chains.
        """
        terminal = self.terminal_event()

        scratch = self.copy()
        scratch.schedule(self._initial_time, self.earliest_occurence(terminal))

        critical = sorted(a for a in scratch._data
                          if scratch._is_zero(scratch.free_float(a)))

        logger.debug('Critical activities: %r', critical)
        return [(a, scratch._data[a]) for a in critical]

    def critical_chains(self):
        """Every initial to terminal path made of critical activities only."""
        critical = NetworkModel(self.find_critical_path())
        return critical.paths(self.initial_event(), self.terminal_event())

    def subnet(self, start, finish):
        """
        Network of all activities lying on a path from ``start`` to ``finish``.

        The new network is scheduled with the earliest occurrence of
        ``start`` and the latest occurrence of ``finish`` in this network.
        """
        sub = NetworkModel(strict=self.strict, debug=self.debug)
        for path in self.paths(start, finish):
            for a, duration in path:
                if a not in sub._data:
                    sub._data[a] = duration

        sub.schedule(self.earliest_occurence(start), self.latest_occurence(finish))
        return sub

    #==========================================================================
    # Container protocol
    #==========================================================================
    def __len__(self):
        return len(self._data)

    def __contains__(self, activity):
        try:
            return _as_activity(activity) in self._data
        except (TypeError, ValueError):
            return False

    def __iter__(self):
        return iter(sorted(self._data))

    def __repr__(self):
        """String representation of the network model."""
        _repr = 'Schedule: %r ... %r\n' % (self._initial_time, self._terminal_time)

        _repr += 'Activities:{\n'
        for a in sorted(self._data):
            _repr += '        ' + repr(a) + '  : ' + repr(self._data[a]) + '\n'
        _repr += '}\n'

        return _repr

#==============================================================================
if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)

    net = NetworkModel()
    net.add_activity(1, 2, 2)
    net.add_activity(1, 4, 2)
    net.add_activity(1, 7, 1)
    net.add_activity(2, 3, 4)
    net.add_activity(4, 5, 5)
    net.add_activity(3, 6, 1)
    net.add_activity(4, 8, 8)
    net.add_activity(5, 6, 4)
    net.add_activity(7, 8, 3)
    net.add_activity(6, 9, 3)
    net.add_activity(8, 9, 5)
    net.schedule(0, 21)

    print(net)
    print('Well formed:', net.is_well_formed())
    for e in net.events():
        print('Event %r: early=%r late=%r' % (e, net.earliest_occurence(e), net.latest_occurence(e)))

    print('Critical path:', net.find_critical_path())
    print('Paths 1 -> 6:', net.paths(1, 6))
