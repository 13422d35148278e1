from docport.app.runners import UndocumentedReporter
from docport.needle import L
from docport.spec import PLACEHOLDER, DocFields, ExceptionDoc
from docport.test_utils import SpyBus, make_config, make_entry


def _types():
    member = make_entry(
        "M:Foo.Bar.Run(System.Int32)",
        DocFields(
            summary="Runs.",
            remarks=PLACEHOLDER,
            returns="",
            params={"count": PLACEHOLDER, "mode": "The mode."},
            exceptions=[ExceptionDoc("T:System.ArgumentException", PLACEHOLDER)],
        ),
    )
    bar = make_entry(
        "T:Foo.Bar",
        DocFields(summary=PLACEHOLDER, remarks="Curated."),
        name="Bar",
        namespace="Foo",
        members=[member],
    )
    missing_summary = make_entry(
        "T:Foo.Baz", DocFields(), name="Baz", namespace="Foo"
    )
    return [bar, missing_summary]


def test_collects_every_empty_field():
    report = UndocumentedReporter(make_config()).collect(_types())

    assert report.summaries == ["T:Foo.Bar", "T:Foo.Baz"]
    assert report.remarks == ["M:Foo.Bar.Run(System.Int32)"]
    assert report.returns == ["M:Foo.Bar.Run(System.Int32)"]
    assert report.values == []
    assert report.params == ["M:Foo.Bar.Run(System.Int32) (count)"]
    assert report.exceptions == [
        "M:Foo.Bar.Run(System.Int32) (T:System.ArgumentException)"
    ]
    assert report.total == 6


def test_reporting_does_not_change_state(monkeypatch):
    spy_bus = SpyBus()
    types = _types()

    with spy_bus.patch(monkeypatch):
        UndocumentedReporter(make_config()).run(types)

    assert not any(t.changed for t in types)
    assert not any(m.changed for t in types for m in t.members)
    spy_bus.assert_id_called(L.undoc.section.summary, level="warning")
    spy_bus.assert_id_called(L.undoc.total, level="warning")


def test_excluded_types_are_not_reported():
    config = make_config(excluded_types=frozenset({"Bar"}))

    report = UndocumentedReporter(config).collect(_types())

    assert report.summaries == ["T:Foo.Baz"]


def test_clean_corpus(monkeypatch):
    spy_bus = SpyBus()
    documented = make_entry("T:Foo.Ok", DocFields(summary="Fine."), name="Ok")

    with spy_bus.patch(monkeypatch):
        report = UndocumentedReporter(make_config()).run([documented])

    assert report.total == 0
    spy_bus.assert_id_called(L.undoc.clean, level="success")
