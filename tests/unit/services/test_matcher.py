from docport.app.services import Matcher, SignatureNormalizer
from docport.needle import L
from docport.spec import DocFields
from docport.test_utils import SpyBus, make_config, make_entry


def _matcher(**config) -> Matcher:
    return Matcher(make_config(**config), SignatureNormalizer())


def test_pairs_type_and_members_scoped_to_type():
    matcher = _matcher()
    index = matcher.build_index(
        [
            make_entry("T:Foo.Bar", source_path="a.xml"),
            make_entry("M:Foo.Bar.Run(System.Int32)", source_path="a.xml"),
            make_entry("T:Foo.Other", source_path="a.xml"),
            make_entry("M:Foo.Other.Run(System.Int32)", source_path="a.xml"),
        ]
    )
    dest = make_entry(
        "T:Foo.Bar",
        members=[
            make_entry("M:Foo.Bar.Run(System.Int32)"),
            make_entry("M:Foo.Bar.Run(System.String)"),
        ],
    )

    pairing = matcher.pair(index, dest)

    assert pairing.matched
    assert pairing.source.doc_id == "T:Foo.Bar"
    assert [p.source.doc_id if p.source else None for p in pairing.members] == [
        "M:Foo.Bar.Run(System.Int32)",
        None,
    ]


def test_unmatched_type_skips_members():
    matcher = _matcher()
    index = matcher.build_index([make_entry("M:Foo.Bar.Run")])
    dest = make_entry("T:Foo.Bar", members=[make_entry("M:Foo.Bar.Run")])

    pairing = matcher.pair(index, dest)

    assert not pairing.matched
    assert pairing.members == []


def test_duplicates_are_logged_and_last_wins(monkeypatch):
    spy_bus = SpyBus()
    matcher = _matcher()
    first = make_entry("T:Foo.Bar", DocFields(summary="first"), source_path="b.xml")
    second = make_entry("T:Foo.Bar", DocFields(summary="second"), source_path="a.xml")

    with spy_bus.patch(monkeypatch):
        index = matcher.build_index([first, second])

    # Entries are ordered by file, so b.xml is indexed after a.xml.
    assert index.find_type(first.key).summary == "first"
    assert index.duplicates == ["T:Foo.Bar"]
    spy_bus.assert_id_called(L.match.duplicate, level="warning")


def test_index_does_not_depend_on_input_order():
    entries = [
        make_entry("T:Foo.Bar", DocFields(summary="x"), source_path="x.xml"),
        make_entry("T:Foo.Bar", DocFields(summary="y"), source_path="y.xml"),
        make_entry("M:Foo.Bar.Run", DocFields(summary="run"), source_path="x.xml"),
    ]
    matcher = _matcher()

    forward = matcher.build_index(entries)
    backward = matcher.build_index(list(reversed(entries)))

    key = entries[0].key
    assert forward.find_type(key).summary == backward.find_type(key).summary == "y"
    assert len(forward) == len(backward) == 2


def test_malformed_entries_are_reported(monkeypatch):
    spy_bus = SpyBus()
    matcher = _matcher()

    with spy_bus.patch(monkeypatch):
        index = matcher.build_index(
            [make_entry("M:Foo.Bar.Run(System.Int32", source_path="a.xml")]
        )
        dest = make_entry("T:Foo.Bar", members=[make_entry("M:Foo.Bar.(")])
        index.add(make_entry("T:Foo.Bar"))
        pairing = matcher.pair(index, dest)

    assert index.malformed == ["M:Foo.Bar.Run(System.Int32"]
    assert [m.doc_id for m in pairing.malformed] == ["M:Foo.Bar.("]
    assert pairing.members[0].source is None
    spy_bus.assert_id_called(L.match.malformed, level="warning")


def test_interface_implementations_can_be_skipped():
    implementing = make_entry(
        "M:Foo.Bar.CompareTo(System.Object)",
        interface_members=("M:System.IComparable.CompareTo(System.Object)",),
    )
    plain = make_entry("M:Foo.Bar.Run")
    source = [
        make_entry("T:Foo.Bar"),
        make_entry("M:Foo.Bar.CompareTo(System.Object)"),
        make_entry("M:Foo.Bar.Run"),
    ]

    skipping = _matcher(skip_interface_implementations=True)
    pairing = skipping.pair(
        skipping.build_index(source),
        make_entry("T:Foo.Bar", members=[implementing, plain]),
    )
    assert pairing.skipped == [implementing]
    assert [p.destination for p in pairing.members] == [plain]

    porting = _matcher()
    pairing = porting.pair(
        porting.build_index(source),
        make_entry("T:Foo.Bar", members=[implementing, plain]),
    )
    assert pairing.skipped == []
    assert len(pairing.members) == 2
