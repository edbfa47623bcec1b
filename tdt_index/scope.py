"""
Date scopes, collection keys and artifact names derived from filenames.

Corpus filenames start with the document date and source, e.g.
"20060512_CNN_0042.html": date 2006-05-12, source CNN, serial 0042.
A scope is either "AllDates" or "yyyymmdd-yyyymmdd".
"""

import datetime
import logging
from dataclasses import dataclass
from pathlib import PurePath

from .config import ALL_DATES, FIRST_STORE_ARG, TEXT_GRAPH_SUFFIX, TOP_ARCS_SUFFIX, TOPICS_SUFFIX
from .errors import InvalidArgument

logger = logging.getLogger(__name__)

# Zeroed calendar placeholder; returned for files without a date in front.
EPOCH_ANCHOR = datetime.date.min

_DATE_FORMAT = "%Y%m%d"


def date_to_string(date: datetime.date) -> str:
    # strftime does not zero-pad years before 1000 on every platform.
    return f"{date.year:04d}{date.month:02d}{date.day:02d}"


def date_from_filename(filename: str, anchor: datetime.date = EPOCH_ANCHOR) -> datetime.date:
    """
    Parse the yyyymmdd date at the front of a filename.
    Returns anchor when the name has no usable date (including "AllDates...").
    """
    head = filename[:8]
    if len(head) < 8 or not head.isdigit():
        return anchor
    try:
        return datetime.datetime.strptime(head, _DATE_FORMAT).date()
    except ValueError:
        logger.debug("Not a date in filename %r", filename)
        return anchor


def collection_key_from_filename(path: str) -> str:
    """
    Source+date key of a document: the 8-digit date followed by the letters
    of the source starting at position 9. The serial number is left out.
    """
    stem = PurePath(path).stem
    if len(stem) < 8:
        raise InvalidArgument(f"Filename too short for a collection key: {path!r}")
    source = []
    for ch in stem[9:]:
        if not ch.isalpha():
            break
        source.append(ch)
    return stem[:8] + "".join(source)


def data_store_arg(store_flag: int, store_string: str) -> str:
    """
    Argument selecting the data store for a scope or filename.
    - flag 0 or 2: month of the first (or only) date
    - flag 1: month of the second date of a scope
    - flag 3: characters 2-4 (source specific naming)
    """
    if store_string == ALL_DATES:
        return FIRST_STORE_ARG
    if store_flag in (0, 2):
        arg = store_string[4:6]
    elif store_flag == 1:
        arg = store_string[13:15]
    elif store_flag == 3:
        arg = store_string[2:4]
    else:
        return FIRST_STORE_ARG
    if not arg:
        raise InvalidArgument(f"Cannot derive a data store from {store_string!r}")
    return arg


def format_scope(scope: str) -> str:
    """'yyyymmdd-yyyymmdd' -> 'dd/mm/yyyy - dd/mm/yyyy'; AllDates unchanged."""
    if scope == ALL_DATES:
        return scope
    return (
        f"{scope[6:8]}/{scope[4:6]}/{scope[0:4]} - "
        f"{scope[15:17]}/{scope[13:15]}/{scope[9:13]}"
    )


def text_graph_filename(base_filename: str) -> str:
    return base_filename + TEXT_GRAPH_SUFFIX


def top_arcs_filename(collection_key: str) -> str:
    return collection_key + TOP_ARCS_SUFFIX


def topics_filename(collection_key: str) -> str:
    return collection_key + TOPICS_SUFFIX


def top_arcs_path_for_topics(topics_path: str) -> str:
    """Path of the arcs file stored next to a topics file of the same scope."""
    return topics_path.replace(TOPICS_SUFFIX, TOP_ARCS_SUFFIX)


@dataclass(frozen=True)
class SessionScope:
    """
    The date window of a working session; default scope/path collaborator of
    the facet document resolver.
    - scope: "AllDates" or "yyyymmdd-yyyymmdd"
    """

    scope: str = ALL_DATES

    def __post_init__(self) -> None:
        if self.scope != ALL_DATES:
            first, sep, last = self.scope.partition("-")
            if not sep or len(first) != 8 or len(last) != 8:
                raise InvalidArgument(f"Scope must be 'yyyymmdd-yyyymmdd': {self.scope!r}")

    @property
    def last_date(self) -> str | None:
        if self.scope == ALL_DATES:
            return None
        return self.scope[9:17]

    def construct_file_scope(self, anchor: datetime.date, filename: str) -> str:
        """
        Two-day scope around the date of a file.

        The file date and the day after it, except when the file date is the
        session's last date: then the day before and the file date, so a file
        scope never runs past the session.
        """
        if self.scope == ALL_DATES:
            return ALL_DATES
        file_date = date_from_filename(filename, anchor)
        this_day = date_to_string(file_date)
        one_day = datetime.timedelta(days=1)
        if this_day == self.last_date:
            return date_to_string(file_date - one_day) + "-" + this_day
        return this_day + "-" + date_to_string(file_date + one_day)

    def data_store_arg(self, store_flag: int, store_string: str) -> str:
        return data_store_arg(store_flag, store_string)
