# tests/test_dynamo_store.py
from decimal import Decimal

import pytest
from botocore.exceptions import ClientError

from cloudhire.core.errors import ConflictError, StorageError, ValidationError
from cloudhire.db import dynamo as dynamo_mod
from cloudhire.db.dynamo import DynamoRecordStore, build_update_expression
from cloudhire.services import jobs as job_service


def _client_error(code):
    return ClientError({"Error": {"Code": code, "Message": code}}, "Op")


class DummyTable:
    """Records the calls boto3's Table resource would receive."""

    def __init__(self, key="id", page_size=2):
        self.key = key
        self.items = {}
        self.calls = []
        self.page_size = page_size
        self.fail_with = None

    def _check(self, op):
        self.calls.append(op)
        if self.fail_with:
            raise self.fail_with

    def get_item(self, Key):
        self._check("get_item")
        item = self.items.get(Key[self.key])
        return {"Item": dict(item)} if item else {}

    def put_item(self, Item, ConditionExpression=None, ExpressionAttributeNames=None):
        self._check("put_item")
        if ConditionExpression and Item[self.key] in self.items:
            raise _client_error("ConditionalCheckFailedException")
        self.items[Item[self.key]] = dict(Item)
        return {}

    def update_item(self, Key, UpdateExpression, ExpressionAttributeNames, ExpressionAttributeValues):
        self._check("update_item")
        self.last_update = (UpdateExpression, ExpressionAttributeNames, ExpressionAttributeValues)
        item = self.items.setdefault(Key[self.key], dict(Key))
        for clause in UpdateExpression[len("SET "):].split(", "):
            name_ph, value_ph = clause.split(" = ")
            item[ExpressionAttributeNames[name_ph]] = ExpressionAttributeValues[value_ph]
        return {}

    def delete_item(self, Key):
        self._check("delete_item")
        self.items.pop(Key[self.key], None)
        return {}

    def scan(self, ExclusiveStartKey=None):
        self._check("scan")
        values = list(self.items.values())
        start = int(ExclusiveStartKey["offset"]) if ExclusiveStartKey else 0
        page = values[start:start + self.page_size]
        resp = {"Items": [dict(v) for v in page]}
        if start + self.page_size < len(values):
            resp["LastEvaluatedKey"] = {"offset": start + self.page_size}
        return resp


def test_build_update_expression_uses_placeholders():
    expr, names, values = build_update_expression({"title": "x", "status": "open"})
    assert expr == "SET #attr0 = :val0, #attr1 = :val1"
    assert names == {"#attr0": "title", "#attr1": "status"}
    assert values == {":val0": "x", ":val1": "open"}


def test_build_update_expression_rejects_empty():
    with pytest.raises(ValidationError):
        build_update_expression({})


def test_round_trip_with_custom_key_attribute():
    table = DummyTable(key="pk")
    store = DynamoRecordStore("jobs", key_attribute="pk", table=table)

    store.put({"id": "42", "title": "Engineer", "score": 1.5})
    # the table only ever sees the key attribute, never a mirrored id
    assert table.items["42"] == {"pk": "42", "title": "Engineer", "score": Decimal("1.5")}

    assert store.get("42") == {"id": "42", "title": "Engineer", "score": 1.5}

    store.update("42", {"salary": 100})
    assert table.items["42"]["salary"] == 100
    assert store.get("42")["salary"] == 100

    store.delete("42")
    assert store.get("42") is None


def test_decimal_integers_come_back_as_int():
    table = DummyTable()
    table.items["1"] = {"id": "1", "title": "T", "openings": Decimal("3")}
    store = DynamoRecordStore("jobs", table=table)
    assert store.get("1")["openings"] == 3
    assert isinstance(store.get("1")["openings"], int)


def test_scan_follows_pagination():
    table = DummyTable(page_size=2)
    store = DynamoRecordStore("jobs", table=table)
    for i in range(5):
        store.put({"id": str(i), "title": f"Job {i}"})
    assert sorted(r["id"] for r in store.scan()) == ["0", "1", "2", "3", "4"]
    assert table.calls.count("scan") == 3


def test_conditional_put_raises_conflict():
    table = DummyTable()
    store = DynamoRecordStore("jobs", table=table)
    store.put({"id": "1", "title": "A"}, if_absent=True)
    with pytest.raises(ConflictError):
        store.put({"id": "1", "title": "B"}, if_absent=True)
    assert table.items["1"]["title"] == "A"


def test_engine_failures_become_storage_errors():
    table = DummyTable()
    table.fail_with = _client_error("ProvisionedThroughputExceededException")
    store = DynamoRecordStore("jobs", table=table)
    for call in (lambda: store.get("1"), store.scan, lambda: store.delete("1"), lambda: store.put({"id": "1"})):
        with pytest.raises(StorageError):
            call()


def test_update_service_never_sends_key_fields():
    table = DummyTable(key="pk")
    store = DynamoRecordStore("jobs", key_attribute="pk", table=table)
    store.put({"id": "7", "title": "Seven"})

    job_service.update_job(store, {"id": "7", "_id": "7", "pk": "7", "title": "Seven v2"}, query_id="7")
    expr, names, _ = table.last_update
    assert list(names.values()) == ["title"]


def test_store_created_from_boto3_resource(monkeypatch):
    table = DummyTable()
    seen = {}

    class DummyResource:
        def Table(self, name):
            seen["table"] = name
            return table

    def fake_resource(name, **kwargs):
        seen["service"] = name
        seen["kwargs"] = kwargs
        return DummyResource()

    monkeypatch.setattr(dynamo_mod.boto3, "resource", fake_resource)
    store = DynamoRecordStore("CloudHireJobs", region_name="ap-southeast-1", endpoint_url="http://localhost:8000")
    assert seen == {
        "service": "dynamodb",
        "kwargs": {"region_name": "ap-southeast-1", "endpoint_url": "http://localhost:8000"},
        "table": "CloudHireJobs",
    }
    store.put({"id": "1", "title": "T"})
    assert table.items["1"]["title"] == "T"
