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
from .errors import (MalformedNetworkError, MissingActivityError, NetworkError,
                     NetworkParseError, NotScheduledError, ReverseActivityError,
                     UnknownEventError)
from .net_model import Activity, NetworkModel
from .txt_io import from_txt, load_network, save_network, to_txt

__all__ = [
    'Activity',
    'NetworkModel',
    'NetworkError',
    'MissingActivityError',
    'UnknownEventError',
    'MalformedNetworkError',
    'NotScheduledError',
    'ReverseActivityError',
    'NetworkParseError',
    'from_txt',
    'to_txt',
    'load_network',
    'save_network',
]
