"""Column names of the COVID-19 Data Hub table.

These are defined by the data source, not chosen here.
"""

from __future__ import annotations

from typing import Sequence


REGION_COL = "administrative_area_level_2"
DATE_COL = "date"

CONFIRMED = "confirmed"
DEATHS = "deaths"
RECOVERED = "recovered"
TESTS = "tests"
POPULATION = "population"
STRINGENCY = "stringency_index"
GOV_RESPONSE = "government_response_index"

OUTCOME_COLS: Sequence[str] = (CONFIRMED, DEATHS, RECOVERED)

REGRESSION_TARGET = CONFIRMED
REGRESSION_PREDICTORS: Sequence[str] = (STRINGENCY, GOV_RESPONSE, POPULATION)

# Minimum the source must return for the frame to be usable at all
SOURCE_KEY_COLS: Sequence[str] = (REGION_COL, DATE_COL)

DEFAULT_TOP_N = 10
OTHER_LABEL = "Other"
