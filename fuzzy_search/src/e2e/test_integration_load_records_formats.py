import json
from pathlib import Path
import pytest
from fuzzymatch.errors import RecordError
from fuzzymatch.loader import load_mapping, load_records

ROWS = [{"id": 1, "name": "apple", "tags": ["fruit"]}, {"id": 2, "name": "grape"}]

def _seed(tmp: Path, name: str, text: str) -> str:
    path = tmp / name
    path.write_text(text, encoding="utf-8")
    return str(path)

@pytest.mark.e2e
def test_load_json_list_and_wrapped_object(tmp_path: Path):
    plain = load_records(_seed(tmp_path, "a.json", json.dumps(ROWS)))
    wrapped = load_records(_seed(tmp_path, "b.json", json.dumps({"records": ROWS})))
    assert plain == wrapped
    assert [r.name for r in plain] == ["apple", "grape"]
    assert plain[1].tags == ()

@pytest.mark.e2e
def test_load_jsonl_skips_blank_lines(tmp_path: Path):
    text = "\n".join(json.dumps(r) for r in ROWS) + "\n\n"
    recs = load_records(_seed(tmp_path, "r.jsonl", text))
    assert [r.id for r in recs] == [1, 2]

@pytest.mark.e2e
def test_bad_record_or_line_fails_the_load(tmp_path: Path):
    with pytest.raises(RecordError):
        load_records(_seed(tmp_path, "bad.json", json.dumps([{"name": "no id"}])))
    with pytest.raises(RecordError):
        load_records(_seed(tmp_path, "bad.jsonl", '{"id": 1, "name": "a"}\n{oops\n'))

@pytest.mark.e2e
def test_load_mapping_requires_object(tmp_path: Path):
    assert load_mapping(_seed(tmp_path, "syn.json", '{"car": ["auto"]}')) == {"car": ["auto"]}
    with pytest.raises(ValueError):
        load_mapping(_seed(tmp_path, "list.json", "[1, 2]"))
