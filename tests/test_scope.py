import datetime

import pytest

from tdt_index.errors import InvalidArgument
from tdt_index.scope import (
    EPOCH_ANCHOR,
    SessionScope,
    collection_key_from_filename,
    data_store_arg,
    date_from_filename,
    date_to_string,
    format_scope,
    text_graph_filename,
    top_arcs_filename,
    top_arcs_path_for_topics,
    topics_filename,
)


class TestFilenames:

    def test_collection_key_drops_serial_number(self):
        assert collection_key_from_filename("/corpus/20060512_CNN_0042.html") == "20060512CNN"
        assert collection_key_from_filename("20060512_CNN_0043.txt") == "20060512CNN"

    def test_collection_key_without_source(self):
        assert collection_key_from_filename("20060512.html") == "20060512"

    def test_collection_key_needs_a_date(self):
        with pytest.raises(InvalidArgument):
            collection_key_from_filename("a.txt")

    def test_artifact_names(self):
        assert top_arcs_filename("20060512CNN") == "20060512CNN_TopArcs.tas"
        assert topics_filename("20060512CNN") == "20060512CNN_Topics.tpc"
        assert text_graph_filename("20060512_CNN_0042") == "20060512_CNN_0042.tgr"
        assert top_arcs_path_for_topics("/w/20060512-20060513_Topics.tpc") == (
            "/w/20060512-20060513_TopArcs.tas"
        )


class TestDates:

    def test_date_from_filename(self):
        assert date_from_filename("20060512_CNN_0042.tgr") == datetime.date(2006, 5, 12)

    def test_undated_filename_returns_anchor(self):
        assert date_from_filename("SEEDDOC.tgr") == EPOCH_ANCHOR
        assert date_from_filename("AllDates_Topics.tpc") == EPOCH_ANCHOR
        assert date_from_filename("20061399_x.tgr") == EPOCH_ANCHOR

    def test_anchor_is_zero_padded(self):
        assert date_to_string(EPOCH_ANCHOR) == "00010101"

    def test_format_scope(self):
        assert format_scope("20060512-20060513") == "12/05/2006 - 13/05/2006"
        assert format_scope("AllDates") == "AllDates"


class TestDataStoreArg:

    def test_flags(self):
        assert data_store_arg(0, "20060512_CNN_0042.tgr") == "05"
        assert data_store_arg(2, "20060512-20060613") == "05"
        assert data_store_arg(1, "20060512-20060613") == "06"
        assert data_store_arg(3, "BE0612") == "06"

    def test_all_dates_selects_first_store(self):
        assert data_store_arg(0, "AllDates") == "1"


class TestSessionScope:

    def test_file_scope_runs_to_next_day(self):
        scope = SessionScope("20060501-20060531")
        assert scope.construct_file_scope(EPOCH_ANCHOR, "20060512_CNN_1.tgr") == "20060512-20060513"

    def test_file_scope_on_last_day_runs_back(self):
        scope = SessionScope("20060501-20060531")
        assert scope.construct_file_scope(EPOCH_ANCHOR, "20060531_CNN_1.tgr") == "20060530-20060531"

    def test_file_scope_crosses_month(self):
        scope = SessionScope("20060501-20060630")
        assert scope.construct_file_scope(EPOCH_ANCHOR, "20060531_CNN_1.tgr") == "20060531-20060601"

    def test_all_dates(self):
        assert SessionScope().construct_file_scope(EPOCH_ANCHOR, "20060512_CNN_1.tgr") == "AllDates"

    def test_malformed_scope(self):
        with pytest.raises(InvalidArgument):
            SessionScope("2006-05")
