# cloudhire/db/dynamo.py
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from cloudhire.core.errors import ConflictError, StorageError, ValidationError
from cloudhire.db.store import Record, RecordStore

logger = logging.getLogger(__name__)


def _to_dynamo(value: Any) -> Any:
    # boto3's resource layer rejects floats; numbers go in as Decimal
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _to_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_dynamo(v) for v in value]
    return value


def _from_dynamo(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: _from_dynamo(v) for k, v in value.items()}
    if isinstance(value, (list, set)):
        return [_from_dynamo(v) for v in value]
    return value


def build_update_expression(fields: Record) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
    """
    Build a SET UpdateExpression for DynamoDB's UpdateItem.

    One clause per field, each using attribute-name / attribute-value
    placeholders so reserved words and odd attribute names are safe:
        {"title": "x", "salary": "1"} ->
        ("SET #attr0 = :val0, #attr1 = :val1",
         {"#attr0": "title", "#attr1": "salary"},
         {":val0": "x", ":val1": "1"})
    """
    if not fields:
        raise ValidationError("no fields to update")
    clauses = []
    names: Dict[str, str] = {}
    values: Dict[str, Any] = {}
    for index, (key, value) in enumerate(fields.items()):
        name_ph = f"#attr{index}"
        value_ph = f":val{index}"
        clauses.append(f"{name_ph} = {value_ph}")
        names[name_ph] = key
        values[value_ph] = _to_dynamo(value)
    return "SET " + ", ".join(clauses), names, values


class DynamoRecordStore(RecordStore):
    """
    DynamoDB-backed store. The table's partition key may carry any attribute
    name; records are exchanged with callers using `id` only.
    """

    def __init__(
        self,
        table_name: str,
        key_attribute: str = "id",
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        table: Any = None,
    ):
        self.table_name = table_name
        self.key_attribute = key_attribute or "id"
        if table is None:
            client_kwargs = {}
            if region_name:
                client_kwargs["region_name"] = region_name
            if endpoint_url:
                client_kwargs["endpoint_url"] = endpoint_url
            table = boto3.resource("dynamodb", **client_kwargs).Table(table_name)
        self._table = table

    def _key(self, record_id: str) -> Dict[str, str]:
        return {self.key_attribute: record_id}

    def _to_item(self, record: Record) -> Record:
        item = dict(record)
        if self.key_attribute != "id":
            item[self.key_attribute] = item.pop("id")
        return _to_dynamo(item)

    def _from_item(self, item: Record) -> Record:
        record = _from_dynamo(dict(item))
        if self.key_attribute != "id" and self.key_attribute in record:
            record["id"] = record.pop(self.key_attribute)
        return record

    def _fail(self, op: str, exc: Exception) -> StorageError:
        logger.exception("DynamoDB %s failed on table %s", op, self.table_name)
        return StorageError(f"storage {op} failed")

    def get(self, record_id: str) -> Optional[Record]:
        try:
            resp = self._table.get_item(Key=self._key(record_id))
        except (ClientError, BotoCoreError) as exc:
            raise self._fail("get", exc) from exc
        item = resp.get("Item")
        return self._from_item(item) if item else None

    def put(self, record: Record, if_absent: bool = False) -> None:
        kwargs: Dict[str, Any] = {"Item": self._to_item(record)}
        if if_absent:
            kwargs["ConditionExpression"] = "attribute_not_exists(#pk)"
            kwargs["ExpressionAttributeNames"] = {"#pk": self.key_attribute}
        try:
            self._table.put_item(**kwargs)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                raise ConflictError("record already exists", id=record["id"]) from exc
            raise self._fail("put", exc) from exc
        except BotoCoreError as exc:
            raise self._fail("put", exc) from exc

    def update(self, record_id: str, fields: Record) -> None:
        expression, names, values = build_update_expression(fields)
        try:
            self._table.update_item(
                Key=self._key(record_id),
                UpdateExpression=expression,
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
            )
        except (ClientError, BotoCoreError) as exc:
            raise self._fail("update", exc) from exc

    def delete(self, record_id: str) -> None:
        try:
            self._table.delete_item(Key=self._key(record_id))
        except (ClientError, BotoCoreError) as exc:
            raise self._fail("delete", exc) from exc

    def scan(self) -> List[Record]:
        items: List[Record] = []
        kwargs: Dict[str, Any] = {}
        try:
            while True:
                resp = self._table.scan(**kwargs)
                items.extend(resp.get("Items", []))
                last_key = resp.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as exc:
            raise self._fail("scan", exc) from exc
        return [self._from_item(item) for item in items]
