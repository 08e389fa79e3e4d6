import pytest

from x_api_explorer.catalog.base import ExpansionOption, ParamSchema
from x_api_explorer.params.body import BodyParamCollector
from x_api_explorer.params.expansions import ExpansionCollector
from x_api_explorer.params.ordering import display_order
from x_api_explorer.params.path import PathParamCollector
from x_api_explorer.params.query import QueryParamCollector

QUERY_PARAMS = (
    ParamSchema(name="ids", type="array", required=True),
    ParamSchema(name="max_results", type="number"),
)


class TestPathParamCollector:
    def test_missing_until_set(self):
        c = PathParamCollector((ParamSchema(name="id", required=True),))
        assert c.missing() == ["id"]
        c.set("id", "42")
        assert c.missing() == []
        assert c.values() == {"id": "42"}

    def test_empty_value_counts_as_missing(self):
        c = PathParamCollector((ParamSchema(name="id", required=True),))
        c.set("id", "")
        assert c.missing() == ["id"]
        assert c.values() == {}

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            PathParamCollector(()).set("id", "1")


class TestQueryParamCollector:
    def test_required_params_start_active(self):
        c = QueryParamCollector(QUERY_PARAMS)
        assert c.is_active("ids") is True
        assert c.is_active("max_results") is False
        assert c.values() == {"ids": ""}
        assert c.active_count == 1

    def test_required_toggle_is_disabled(self):
        c = QueryParamCollector(QUERY_PARAMS)
        c.toggle("ids", False)
        assert c.is_active("ids") is True

    def test_unchecking_clears_value(self):
        c = QueryParamCollector(QUERY_PARAMS)
        c.set("max_results", "10")
        assert c.values() == {"ids": "", "max_results": "10"}
        c.toggle("max_results", False)
        assert "max_results" not in c.values()
        c.toggle("max_results", True)
        assert c.values()["max_results"] == ""

    def test_missing_required(self):
        c = QueryParamCollector(QUERY_PARAMS)
        assert c.missing_required() == ["ids"]
        c.set("ids", "1,2")
        assert c.missing_required() == []

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown query parameter"):
            QueryParamCollector(QUERY_PARAMS).set("nope", "1")


class TestBodyParamCollector:
    def test_booleans_become_strings(self):
        c = BodyParamCollector((ParamSchema(name="flag", type="boolean"),))
        c.set("flag", True)
        assert c.values() == {"flag": "true"}
        c.set("flag", False)
        assert c.values() == {"flag": "false"}

    def test_all_params_always_present(self):
        c = BodyParamCollector((ParamSchema(name="text", required=True), ParamSchema(name="poll", type="object")))
        assert c.values() == {"text": "", "poll": ""}
        assert c.missing_required() == ["text"]

    def test_raw_body_defaults_empty(self):
        assert BodyParamCollector(()).raw_body == ""


class TestExpansionCollector:
    OPTIONS = (
        ExpansionOption(name="author_id"),
        ExpansionOption(name="referenced_tweets.id"),
        ExpansionOption(name="geo.place_id"),
    )

    def test_select_all_and_none(self):
        c = ExpansionCollector(self.OPTIONS)
        c.set_all(True)
        value = c.value()
        assert value.split(",") == ["author_id", "referenced_tweets.id", "geo.place_id"]
        assert len(set(value.split(","))) == 3
        assert c.all_selected is True
        c.set_all(False)
        assert c.value() == ""
        assert c.selected_count == 0

    def test_toggle_keeps_catalog_order(self):
        c = ExpansionCollector(self.OPTIONS)
        c.toggle("geo.place_id", True)
        c.toggle("author_id", True)
        c.toggle("author_id", True)
        assert c.value() == "author_id,geo.place_id"
        assert c.all_selected is False

    def test_empty_options_never_all_selected(self):
        c = ExpansionCollector(())
        c.set_all(True)
        assert c.all_selected is False
        assert c.value() == ""

    def test_unknown_option(self):
        with pytest.raises(ValueError):
            ExpansionCollector(self.OPTIONS).toggle("nope", True)


class TestDisplayOrder:
    def test_required_first_then_name(self):
        params = [
            ParamSchema(name="zeta"),
            ParamSchema(name="beta", required=True),
            ParamSchema(name="alpha"),
            ParamSchema(name="gamma", required=True),
        ]
        assert [p.name for p in display_order(params)] == ["beta", "gamma", "alpha", "zeta"]
