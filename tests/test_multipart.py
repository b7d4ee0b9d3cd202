from datetime import date

from halcyon_client.multipart import FileInfo, FormData, field_text, json_to_form_data
from pydantic import BaseModel, Field


def test_nested_objects_are_dotted_and_lists_are_opaque():
    form = json_to_form_data({"a": {"b": 1, "c": "s"}, "d": [1, 2]})
    assert form.fields == [("a.b", 1), ("a.c", "s"), ("d", [1, 2])]


def test_deep_nesting_and_falsy_values():
    form = json_to_form_data({"a": {"b": {"c": 0}}, "e": "", "f": None, "g": {}})
    assert form.fields == [("a.b.c", 0), ("e", ""), ("f", None)]


def test_lists_of_objects_are_not_recursed():
    items = [{"x": 1}, {"x": 2}]
    form = json_to_form_data({"items": items})
    assert form.fields == [("items", items)]


def test_files_and_dates_are_leaf_values():
    upload = FileInfo(file_name="pic.png", data=b"\x89PNG", content_type="image/png")
    when = date(2024, 1, 2)
    form = json_to_form_data({"meta": {"taken": when}, "file": upload})
    assert form.fields == [("meta.taken", when), ("file", upload)]
    assert form.has_files()


def test_appends_to_existing_form():
    form = FormData()
    form.append("first", "1")
    json_to_form_data({"second": 2}, form)
    assert [name for name, _ in form] == ["first", "second"]
    assert len(form) == 2


class Upload(BaseModel):
    title: str
    owner_id: int = Field(alias="ownerId")


def test_pydantic_payload_is_dumped_by_alias():
    form = json_to_form_data(Upload(title="t", ownerId=4))
    assert form.fields == [("title", "t"), ("ownerId", 4)]


def test_field_text_rendering():
    assert field_text("s") == "s"
    assert field_text(True) == "true"
    assert field_text(None) == ""
    assert field_text([1, 2]) == "1,2"
    assert field_text(date(2024, 1, 2)) == "2024-01-02"
    assert field_text(3.5) == "3.5"


def test_to_httpx_files_keeps_order_and_file_parts():
    upload = FileInfo(file_name="a.txt", data=b"hi")
    form = json_to_form_data({"a": {"b": 1}, "file": upload, "d": [1, 2]})
    assert form.to_httpx_files() == [
        ("a.b", (None, "1")),
        ("file", ("a.txt", b"hi", None)),
        ("d", (None, "1,2")),
    ]
