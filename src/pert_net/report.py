#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Network reports: text, dictionaries, pandas DataFrames and Graphviz drawings.
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
import graphviz
import pandas as pd

#==============================================================================
def _join(events):
    return ' '.join(str(e) for e in sorted(events))

def format_network(net):
    """Initial/terminal events, well-formedness and the activity list."""
    out  = '* Network\n----------\n'
    out += 'Initial event(s): %s\n' % _join(net.initial_events())
    out += 'Terminal event(s): %s\n' % _join(net.terminal_events())
    out += 'Well formed: %s\n' % net.is_well_formed()
    out += '----------\n'
    for a in net:
        out += '%s--->%s  : %s\n' % (a.trigger, a.completion, net.estimated_duration(a))
    return out

def format_schedule(net):
    """Schedule boundaries and the computed project bounds."""
    out  = '* Schedule\n----------\n'
    out += 'Initial time: %s\n' % (net.initial_time,)
    out += 'Terminal time: %s\n' % (net.terminal_time,)
    out += 'Earliest finish: %s\n' % (net.earliest_occurence(net.terminal_event()),)
    out += 'Latest start: %s\n' % (net.latest_occurence(net.initial_event()),)
    return out

def format_path(path):
    """One line per path: ``1--->3--->4  (7)``"""
    if not path:
        return ''
    total = path[0][1]
    for _, duration in path[1:]:
        total = total + duration
    events = [str(path[0][0].trigger)] + [str(a.completion) for a, _ in path]
    return '%s  (%s)' % ('--->'.join(events), total)

#==============================================================================
def to_dict(net):
    """
    Convert a scheduled network to dictionary representation.

    Returns
    -------
    dict
        Dictionary with structure:

        .. code-block:: python

            {
                'activities': [
                    {activity1_data},
                    ...
                ],
                'events': [
                    {event1_data},
                    ...
                ]
            }
    """
    critical = {a for a, _ in net.find_critical_path()}
    stages = net.stages() if net.debug else None

    activities_data = []
    for a in net:
        ret = {
            'trigger'          : a.trigger,
            'completion'       : a.completion,
            'duration'         : net.estimated_duration(a),
            'earliest_start'   : net.earliest_start(a),
            'earliest_finish'  : net.earliest_finish(a),
            'latest_start'     : net.latest_start(a),
            'latest_finish'    : net.latest_finish(a),
            'activity_float'   : net.activity_float(a),
            'free_float'       : net.free_float(a),
            'interfering_float': net.interfering_float(a),
            'independent_float': net.independent_float(a),
            'critical'         : a in critical,
        }
        if stages is not None:
            ret['stage'] = stages[a.trigger]
        activities_data.append(ret)

    events_data = []
    for e in net.events():
        ret = {
            'id'      : e,
            'earliest': net.earliest_occurence(e),
            'latest'  : net.latest_occurence(e),
            'slack'   : net.event_slack(e),
        }
        if stages is not None:
            ret['stage'] = stages[e]
        events_data.append(ret)

    return {
        'activities': activities_data,
        'events': events_data
    }

def to_dataframe(net):
    """
    Convert a scheduled network to pandas DataFrames.

    Returns
    -------
    tuple
        (activities_df, events_df)
    """
    model_dict = to_dict(net)

    activities_df = pd.DataFrame(model_dict['activities'])
    events_df = pd.DataFrame(model_dict['events'])

    return activities_df, events_df

#==============================================================================
def viz(net, output_path=None, fmt='png'):
    """
    Create Graphviz visualization of the network.

    Parameters
    ----------
    net : NetworkModel
        Scheduled network
    output_path : str, optional
        Render the drawing to this path (without extension)
    fmt : str
        Output format used with ``output_path``

    Returns
    -------
    graphviz.Digraph
        Graphviz object for rendering or saving

    Notes
    -----
    Events are drawn as ``{id |{earliest|latest}| slack}`` records,
    critical events and activities are red.
    """
    dot = graphviz.Digraph(node_attr={'shape': 'record', 'style': 'rounded'})
    dot.graph_attr['rankdir'] = 'LR'

    critical = {a for a, _ in net.find_critical_path()}
    critical_events = {a.trigger for a in critical} | {a.completion for a in critical}

    def _cl(is_critical):
        return '#ff0000' if is_critical else '#000000'

    # Add events/nodes
    for e in net.events():
        dot.node(str(e),
                 '{%s |{%s|%s}| %s}' % (e,
                                        net.earliest_occurence(e),
                                        net.latest_occurence(e),
                                        net.event_slack(e)),
                 color=_cl(e in critical_events))

    # Add activities/edges
    for a in net:
        lbl = 't=%s\n f=%s' % (net.estimated_duration(a), net.free_float(a))
        dot.edge(str(a.trigger), str(a.completion),
                 label=lbl,
                 color=_cl(a in critical))

    if output_path is not None:
        dot.render(output_path, format=fmt, cleanup=True)

    return dot
