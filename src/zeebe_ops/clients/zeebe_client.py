"""Zeebe gateway command client implementing ICommandClient over gRPC."""

from __future__ import annotations

import json
from typing import Any, Callable

import grpc
from zeebe_grpc import gateway_pb2, gateway_pb2_grpc

from zeebe_ops.core.exceptions import CommandRejectedError
from zeebe_ops.models.process import ProcessInstance

LATEST_VERSION = -1


def _describe(exc: grpc.RpcError) -> str:
    if isinstance(exc, grpc.Call):
        return f"{exc.code().name}: {exc.details()}"
    return str(exc) or exc.__class__.__name__


class ZeebeCommandClient:
    """Production ICommandClient backed by the Zeebe gateway gRPC API."""

    def __init__(self, gateway_address: str = "localhost:26500", use_tls: bool = False,
                 timeout_s: float | None = None, channel: grpc.Channel | None = None) -> None:
        self._gateway_address = gateway_address
        self._timeout = timeout_s
        if channel is None:
            if use_tls:
                channel = grpc.secure_channel(gateway_address, grpc.ssl_channel_credentials())
            else:
                channel = grpc.insecure_channel(gateway_address)
        self._channel = channel
        self._stub = gateway_pb2_grpc.GatewayStub(channel)

    def _send(self, command: str, method: Callable[..., Any], request: Any) -> Any:
        try:
            return method(request, timeout=self._timeout)
        except grpc.RpcError as exc:
            raise CommandRejectedError(command, _describe(exc)) from exc

    def create_instance(self, bpmn_process_id: str, variables: dict[str, Any]) -> ProcessInstance:
        response = self._send(
            "create-instance",
            self._stub.CreateProcessInstance,
            gateway_pb2.CreateProcessInstanceRequest(
                bpmnProcessId=bpmn_process_id,
                version=LATEST_VERSION,
                variables=json.dumps(variables),
            ),
        )
        return ProcessInstance(
            bpmn_process_id=response.bpmnProcessId,
            process_definition_key=response.processDefinitionKey,
            process_instance_key=response.processInstanceKey,
            version=response.version,
        )

    def cancel_instance(self, process_instance_key: int) -> None:
        self._send(
            "cancel-instance",
            self._stub.CancelProcessInstance,
            gateway_pb2.CancelProcessInstanceRequest(processInstanceKey=process_instance_key),
        )

    def publish_message(self, name: str, correlation_key: str, time_to_live_ms: int,
                        variables: dict[str, Any]) -> None:
        self._send(
            "publish-message",
            self._stub.PublishMessage,
            gateway_pb2.PublishMessageRequest(
                name=name,
                correlationKey=correlation_key,
                timeToLive=time_to_live_ms,
                variables=json.dumps(variables),
            ),
        )

    def set_variables(self, element_instance_key: int, variables: dict[str, Any]) -> None:
        self._send(
            "set-variables",
            self._stub.SetVariables,
            gateway_pb2.SetVariablesRequest(
                elementInstanceKey=element_instance_key,
                variables=json.dumps(variables),
            ),
        )

    def update_retries(self, job_key: int, retries: int) -> None:
        self._send(
            "update-retries",
            self._stub.UpdateJobRetries,
            gateway_pb2.UpdateJobRetriesRequest(jobKey=job_key, retries=retries),
        )

    def resolve_incident(self, incident_key: int) -> None:
        self._send(
            "resolve-incident",
            self._stub.ResolveIncident,
            gateway_pb2.ResolveIncidentRequest(incidentKey=incident_key),
        )

    def close(self) -> None:
        self._channel.close()
