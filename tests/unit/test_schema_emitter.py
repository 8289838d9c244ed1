# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for SchemaEmitter."""

from __future__ import annotations

import re

import pytest

from grpcwizard.analysis import ContractAnalysis, analyze_manifest
from grpcwizard.emitters import SchemaEmitter
from grpcwizard.manifest import ServiceManifest
from grpcwizard.models import GenerationOptions
from tests.helpers import make_manifest_data, operation, record

pytestmark = pytest.mark.unit

PEOPLE_SCHEMA = """\
syntax = "proto3";

package people_grpc;

service Grpc_People {
    rpc GetAll(Grpc_GetAllPeopleRequest) returns (Grpc_PeopleReply);
    rpc GetPersonById(Grpc_GetPersonByIdRequest) returns (Grpc_Person);
}

message Grpc_GetAllPeopleRequest {
}

message Grpc_PeopleReply {
    repeated Grpc_Person people = 1;
}

message Grpc_Person {
    int32 id = 1;
    string first_name = 2;
    string last_name = 3;
    string bio = 4;
    string photo_url = 5;
}

message Grpc_GetPersonByIdRequest {
    int32 id = 1;
}
"""


def analysis_for(operations, records) -> ContractAnalysis:
    data = make_manifest_data(operations, records)
    return analyze_manifest(ServiceManifest.model_validate(data))


class TestSchemaEmitter:
    def test_people_schema(
        self, people_analysis: ContractAnalysis, people_options: GenerationOptions
    ) -> None:
        assert SchemaEmitter().render(people_analysis, people_options) == PEOPLE_SCHEMA

    def test_emit_returns_shared_artifact(
        self, people_analysis: ContractAnalysis, people_options: GenerationOptions
    ) -> None:
        artifact = SchemaEmitter().emit(people_analysis, people_options)

        assert artifact.role == "shared"
        assert artifact.file_name == "people.proto"

    def test_get_all_item_reply(self) -> None:
        analysis = analysis_for(
            [operation("GetAll", "Empty", "Awaitable[Reply]")],
            [
                record("Empty"),
                record("Reply", items="list[Item]"),
                record("Item", Id="int", Name="string"),
            ],
        )
        options = GenerationOptions(
            namespace="shop.shared", service_name="Shop", proto_file_name="shop.proto"
        )

        schema = SchemaEmitter().render(analysis, options)

        assert "package shop.shared;" in schema
        assert "message Grpc_Item {\n    int32 id = 1;\n    string name = 2;\n}" in schema
        assert "message Grpc_Reply {\n    repeated Grpc_Item items = 1;\n}" in schema

    def test_shared_input_yields_one_message(self) -> None:
        analysis = analysis_for(
            [
                operation("A", "Request", "Awaitable[Reply]"),
                operation("B", "Request", "Awaitable[Reply]"),
            ],
            [record("Request", q="str"), record("Reply")],
        )
        options = GenerationOptions(namespace="x", service_name="X", proto_file_name="x.proto")

        schema = SchemaEmitter().render(analysis, options)

        assert schema.count("message Grpc_Request {") == 1
        assert schema.count("rpc ") == 2

    def test_ordinals_restart_per_message(self) -> None:
        analysis = analysis_for(
            [operation("Get", "Request", "Awaitable[Reply]")],
            [record("Request", a="int", b="str", c="double"), record("Reply", x="float", y="str")],
        )
        options = GenerationOptions(namespace="x", service_name="X", proto_file_name="x.proto")

        schema = SchemaEmitter().render(analysis, options)

        blocks = re.findall(r"message \w+ \{\n(.*?)\}", schema, flags=re.DOTALL)
        ordinals = [
            [int(n) for n in re.findall(r"= (\d+);", block)] for block in blocks
        ]
        assert ordinals == [[1, 2, 3], [1, 2]]
