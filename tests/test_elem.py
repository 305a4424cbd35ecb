import pytest

from akoconf.elem import Elem, ElemType


def _song_tree():
    def artist(name, links):
        entry = Elem.table()
        entry.table_add("name", Elem.string(name))
        link_array = entry.table_add("links", Elem.array())
        for link in links:
            link_array.append(Elem.string(link))
        return entry

    root = Elem.table()
    song = root.table_add("song", Elem.table())
    song.table_add("name", Elem.string("The MMORPG ADDICTS ANTHEM"))
    artists = song.table_add("artists", Elem.array())
    artists.append(artist("TENKOMORI", ["a", "b", "c"]))
    artists.append(artist("Hatsune Miku", ["e", "f", "g"]))
    return root


def test_util_get_paths():
    root = _song_tree()
    assert root.get("song.artists.0.links.1").as_string() == "b"
    assert root.get("song.artists.1.links.1").as_string() == "f"
    assert root.get("song.artists.0.name").as_string() == "TENKOMORI"


def test_get_missing_key_returns_none():
    root = _song_tree()
    assert root.get("song.missing") is None
    assert root.get("nothing.here") is None


def test_get_malformed_paths_return_none():
    root = _song_tree()
    assert root.get("") is None
    assert root.get("song.") is None
    assert root.get(".song") is None
    assert root.get("song name") is None
    assert root.get("song$") is None
    assert root.get("song.artists.name") is None


def test_get_with_quoted_key():
    root = Elem.table()
    inner = root.table_add("my key", Elem.table())
    inner.table_add("x", Elem.integer(7))
    assert root.get('"my key".x').as_int() == 7


def test_get_array_index_out_of_range():
    root = _song_tree()
    with pytest.raises(IndexError):
        root.get("song.artists.5")


def test_scalar_constructors_and_getters():
    assert Elem.string("hi").as_string() == "hi"
    assert Elem.integer(42).as_int() == 42
    assert Elem.floating(39.39).as_float() == 39.39
    assert Elem.shorttype("Players.Plexamp").as_shorttype() == "Players.Plexamp"
    assert Elem.boolean(True).as_bool() is True
    assert Elem.boolean(False).as_bool() is False
    assert Elem.null().kind is ElemType.NULL


def test_error_element():
    err = Elem.error("boom")
    assert err.is_error()
    assert err.as_string() == "boom"
    assert not Elem.string("fine").is_error()


def test_getter_wrong_kind_raises():
    with pytest.raises(TypeError):
        Elem.integer(1).as_string()
    with pytest.raises(TypeError):
        Elem.string("x").as_int()
    with pytest.raises(TypeError):
        Elem.shorttype("x").as_string()
    with pytest.raises(TypeError):
        Elem.table().append(Elem.null())


def test_int_range_enforced():
    assert Elem.integer(2**63 - 1).as_int() == 2**63 - 1
    with pytest.raises(OverflowError):
        Elem.integer(2**63)
    with pytest.raises(TypeError):
        Elem.integer(True)


def test_assign_changes_kind():
    elem = Elem.table()
    elem.table_add("a", Elem.integer(1))
    elem.assign(ElemType.INT, 5)
    assert elem.as_int() == 5
    elem.assign(ElemType.ARRAY)
    assert len(elem) == 0
    elem.assign(ElemType.NULL)
    assert elem.kind is ElemType.NULL and elem.value is None


def test_assign_same_container_keeps_entries():
    elem = Elem.array()
    elem.append(Elem.integer(1))
    elem.assign(ElemType.ARRAY)
    assert len(elem) == 1


def test_table_add_get_and_contains():
    table = Elem.table()
    value = Elem.string("x")
    assert table.table_add("k", value) is value
    assert table.table_get("k") is value
    assert "k" in table
    assert "other" not in table
    assert table.table_get("other") is None
    assert len(table) == 1


def test_table_duplicate_keys_first_found_last_removed():
    table = Elem.table()
    table.table_add("k", Elem.integer(1))
    table.table_add("k", Elem.integer(2))
    assert table.table_get("k").as_int() == 1
    table.table_remove("k")
    assert [(key, item.as_int()) for key, item in table.table_items()] == [("k", 1)]


def test_table_remove_missing_is_noop():
    table = Elem.table()
    table.table_add("a", Elem.null())
    table.table_remove("b")
    assert list(table) == ["a"]


def test_table_items_keep_order():
    table = Elem.table()
    for key in ("title", "artist", "player"):
        table.table_add(key, Elem.null())
    assert [key for key, _ in table.table_items()] == ["title", "artist", "player"]
    assert list(table) == ["title", "artist", "player"]


def test_array_operations():
    array = Elem.array()
    for number in (1, 2, 3):
        array.append(Elem.integer(number))
    assert len(array) == 3
    assert array.array_get(1).as_int() == 2
    array.array_remove(0)
    assert [item.as_int() for item in array] == [2, 3]
    with pytest.raises(IndexError):
        array.array_get(2)
    with pytest.raises(IndexError):
        array.array_remove(5)


def test_len_on_scalar_raises():
    with pytest.raises(TypeError):
        len(Elem.integer(1))


def test_equality_is_structural():
    first = _song_tree()
    second = _song_tree()
    assert first == second
    second.get("song.artists.0.links").append(Elem.string("d"))
    assert not first == second


def test_elem_type_display_names():
    elems = [
        Elem.null(),
        Elem.string("s"),
        Elem.integer(1),
        Elem.floating(1.5),
        Elem.shorttype("a.b"),
        Elem.boolean(True),
        Elem.table(),
        Elem.array(),
        Elem.error("e"),
    ]
    assert [elem.kind.value for elem in elems] == [
        "null", "string", "int", "float", "shorttype",
        "bool", "table", "array", "error",
    ]