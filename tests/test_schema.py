"""tests/test_schema.py — Unit tests for schema checks"""
from engine import evaluate


def _tables(*tables):
    return {"tables": list(tables)}


def _titles(result):
    return [f["title"] for f in result["findings"]]


def test_missing_primary_key_one_finding_per_table():
    result = evaluate(_tables({"name": "posts", "columns": [
        {"name": "id"}, {"name": "body"}, {"name": "slug"},
    ]}))
    assert _titles(result) == ['Table "posts" has no primary key']
    finding = result["findings"][0]
    assert finding["severity"] == "HIGH"
    assert finding["category"] == "SCHEMA"
    assert "has 3 columns" in finding["evidence"]


def test_table_without_columns_has_no_primary_key():
    result = evaluate(_tables({"name": "empty", "columns": []}, {"name": "bare"}))
    assert result["summary"]["high"] == 2


def test_nullable_email_and_title():
    result = evaluate(_tables({"name": "t", "columns": [
        {"name": "id", "primaryKey": True},
        {"name": "email", "nullable": True},
        {"name": "title", "nullable": True},
        {"name": "name", "nullable": True},
        {"name": "Email", "nullable": True},
        {"name": "title", "nullable": False},
    ]}))
    assert result["summary"] == {"high": 0, "medium": 2, "low": 0}
    assert _titles(result) == [
        'Column "email" in table "t" is nullable',
        'Column "title" in table "t" is nullable',
    ]


def test_id_suffix_without_foreign_key():
    result = evaluate(_tables({"name": "posts", "columns": [
        {"name": "id", "primaryKey": True},
        {"name": "user_id"},
        {"name": "userid"},
        {"name": "user_ID"},
    ]}))
    assert _titles(result) == ['Column "user_id" in table "posts" lacks foreign key']


def test_foreign_key_to_missing_table():
    result = evaluate(_tables(
        {"name": "users", "columns": [{"name": "id", "primaryKey": True}]},
        {"name": "posts", "columns": [
            {"name": "id", "primaryKey": True},
            {"name": "user_id", "foreignKey": {"table": "user", "column": "id"}},
        ]},
    ))
    # Present foreignKey: no "lacks foreign key", only the broken target.
    assert _titles(result) == ['Foreign key in "posts.user_id" points to non-existent table']
    assert 'references table "user"' in result["findings"][0]["evidence"]


def test_foreign_key_target_may_appear_later():
    result = evaluate(_tables(
        {"name": "posts", "columns": [
            {"name": "id", "primaryKey": True},
            {"name": "user_id", "foreignKey": {"table": "users", "column": "id"}},
        ]},
        {"name": "users", "columns": [{"name": "id", "primaryKey": True}]},
    ))
    assert result["findings"] == []


def test_foreign_key_target_column_not_verified():
    result = evaluate(_tables(
        {"name": "users", "columns": [{"name": "id", "primaryKey": True}]},
        {"name": "posts", "columns": [
            {"name": "id", "primaryKey": True},
            {"name": "owner", "foreignKey": {"table": "users", "column": "nope"}},
        ]},
    ))
    assert result["findings"] == []


def test_empty_foreign_key_object_is_broken():
    result = evaluate(_tables({"name": "t", "columns": [
        {"name": "id", "primaryKey": True},
        {"name": "x_id", "foreignKey": {}},
    ]}))
    assert _titles(result) == ['Foreign key in "t.x_id" points to non-existent table']


def test_unnamed_column_skips_name_checks():
    result = evaluate(_tables({"name": "t", "columns": [
        {"type": "integer", "primaryKey": True},
        {"type": "text", "nullable": True},
    ]}))
    assert result["findings"] == []


def test_per_table_order():
    result = evaluate(_tables({"name": "t", "columns": [
        {"name": "a_id"},
        {"name": "email", "nullable": True},
    ]}))
    assert _titles(result) == [
        'Table "t" has no primary key',
        'Column "a_id" in table "t" lacks foreign key',
        'Column "email" in table "t" is nullable',
    ]
