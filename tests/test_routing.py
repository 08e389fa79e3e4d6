import yaml

from x_api_explorer.request.routing import DtabPair, DtabSetStore, RoutingDirectives, parse_dtab, routing_headers


class TestDtabPair:
    def test_parse(self):
        pair = parse_dtab("/s/foo => /s/bar")
        assert pair.from_ == "/s/foo"
        assert pair.to == "/s/bar"
        assert pair.render() == "/s/foo=>/s/bar"

    def test_parse_without_arrow(self):
        pair = parse_dtab("/s/foo")
        assert pair.from_ == "/s/foo"
        assert pair.to == ""
        assert pair.is_active is False

    def test_blank_and_active(self):
        assert DtabPair().is_blank is True
        assert DtabPair(from_="/s/a").is_blank is False
        assert DtabPair(from_="/s/a", to="  ").is_active is False


class TestRoutingDirectives:
    def test_starts_with_one_blank_row(self):
        directives = RoutingDirectives()
        assert len(directives.dtabs) == 1
        assert directives.dtabs[0].is_blank

    def test_paste_into_from_splits_both_sides(self):
        directives = RoutingDirectives()
        directives.update_dtab(0, from_="/s/a=>/s/b")
        assert directives.dtabs[0] == DtabPair(from_="/s/a", to="/s/b")

    def test_update_one_side(self):
        directives = RoutingDirectives()
        directives.update_dtab(0, from_="/s/a")
        directives.update_dtab(0, to="/s/b")
        assert directives.dtabs[0].render() == "/s/a=>/s/b"

    def test_removing_last_row_leaves_blank_row(self):
        directives = RoutingDirectives(dtabs=[DtabPair(from_="/s/a", to="/s/b")])
        directives.remove_dtab(0)
        assert len(directives.dtabs) == 1
        assert directives.dtabs[0].is_blank

    def test_remove_row(self):
        directives = RoutingDirectives()
        directives.add_dtab(DtabPair(from_="/s/a", to="/s/b"))
        directives.remove_dtab(0)
        assert [d.render() for d in directives.dtabs] == ["/s/a=>/s/b"]


class TestRoutingHeaders:
    def test_defaults_add_nothing(self):
        assert routing_headers(RoutingDirectives()) == {}

    def test_active_dtabs_joined_in_order(self):
        directives = RoutingDirectives(dtabs=[
            DtabPair(from_="/s/a", to="/s/b"),
            DtabPair(from_="/s/half"),
            DtabPair(from_="/s/c", to="/s/d"),
        ])
        assert routing_headers(directives) == {"Dtab-Local": "/s/a=>/s/b;/s/c=>/s/d"}

    def test_tracing(self):
        assert routing_headers(RoutingDirectives(tracing=True)) == {"X-B3-Flags": "1"}

    def test_staging_environment(self):
        headers = routing_headers(RoutingDirectives(environment="staging2"))
        assert headers == {
            "X-TFE-Experiment-environment": "staging2",
            "X-Decider-Overrides": "tfe_route:des_apiservice_staging2=on",
        }


class TestDtabSetStore:
    def test_missing_file_is_empty(self, tmp_path):
        assert DtabSetStore(tmp_path / "sets.yaml").get() == {}

    def test_set_then_get(self, tmp_path):
        path = tmp_path / "nested" / "sets.yaml"
        store = DtabSetStore(path)
        store.set({"canary": [DtabPair(from_="/s/a", to="/s/b")]})

        assert yaml.safe_load(path.read_text()) == {"canary": [{"from": "/s/a", "to": "/s/b"}]}
        assert store.get() == {"canary": [DtabPair(from_="/s/a", to="/s/b")]}
