# tests/test_cli.py

import json

import pytest
from click.testing import CliRunner

from wasm_indexer.cli import __main__ as cli_main
from wasm_indexer.core.logging import IndexerLogger
from wasm_indexer.modules.wasm import WasmModule

from conftest import CONTRACT, SENDER, TX_HASH, FakeSource, FakeStore, b64


@pytest.fixture
def runner():
    IndexerLogger.reset()
    yield CliRunner()
    IndexerLogger.reset()


@pytest.fixture
def fake_indexer(monkeypatch):
    store = FakeStore()
    module = WasmModule(FakeSource(), store)
    monkeypatch.setattr(cli_main, "create_indexer", lambda: module)
    return store


def write_tx(tmp_path, result):
    payload = {
        "tx": {"body": {"messages": [
            {"@type": "/cosmwasm.wasm.v1.MsgExecuteContract", "sender": SENDER,
             "contract": CONTRACT, "msg": {"increment": {}}, "funds": []},
            {"@type": "/cosmos.bank.v1beta1.MsgSend", "from_address": SENDER},
        ]}},
        "tx_response": {
            "height": "321",
            "txhash": TX_HASH,
            "timestamp": "2023-05-01T12:00:00Z",
            "logs": [
                {"msg_index": 0, "events": [{"type": "execute", "attributes": [
                    {"key": "_contract_address", "value": CONTRACT},
                    {"key": "result", "value": result},
                ]}]},
                {"msg_index": 1, "events": [{"type": "transfer", "attributes": []}]},
            ],
        },
    }
    path = tmp_path / "tx.json"
    path.write_text(json.dumps(payload))
    return path


def test_process_tx(runner, fake_indexer, tmp_path):
    result = runner.invoke(cli_main.cli, ["process-tx", str(write_tx(tmp_path, b64(b"ok")))], obj={})

    assert result.exit_code == 0, result.output
    assert "height 321" in result.output
    assert "1 wasm message(s) of 2" in result.output
    assert fake_indexer.operations() == ["save_execute"]


def test_process_tx_failure_exits_nonzero(runner, fake_indexer, tmp_path):
    result = runner.invoke(cli_main.cli, ["process-tx", str(write_tx(tmp_path, "%%%"))], obj={})

    assert result.exit_code == 1
    assert "[decode]" in result.output
    assert fake_indexer.calls == []


def test_process_tx_rejects_invalid_file(runner, fake_indexer, tmp_path):
    path = tmp_path / "tx.json"
    path.write_text(json.dumps({"tx": {}}))

    result = runner.invoke(cli_main.cli, ["process-tx", str(path)], obj={})

    assert result.exit_code == 1
    assert "Invalid transaction file" in result.output


def test_params(runner, fake_indexer):
    result = runner.invoke(cli_main.cli, ["params", "42"], obj={})

    assert result.exit_code == 0, result.output
    assert fake_indexer.operations() == ["save_params"]
    assert fake_indexer.calls[0][1].height == 42
