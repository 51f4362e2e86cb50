"""Cost Inflation Index notified under section 48 (base year 2001-02 = 100)."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

CII_BASE_YEAR = "2001-02"

# Value returned for a financial year missing from the table
CII_FALLBACK = 100

COST_INFLATION_INDEX: Mapping[str, int] = MappingProxyType({
    "2001-02": 100,
    "2002-03": 105,
    "2003-04": 109,
    "2004-05": 113,
    "2005-06": 117,
    "2006-07": 122,
    "2007-08": 129,
    "2008-09": 137,
    "2009-10": 148,
    "2010-11": 167,
    "2011-12": 184,
    "2012-13": 200,
    "2013-14": 220,
    "2014-15": 240,
    "2015-16": 254,
    "2016-17": 264,
    "2017-18": 272,
    "2018-19": 280,
    "2019-20": 289,
    "2020-21": 301,
    "2021-22": 317,
    "2022-23": 331,
    "2023-24": 348,
    "2024-25": 363,
    "2025-26": 376,
})
