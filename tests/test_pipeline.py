# -*- coding: utf-8 -*-
import asyncio
import logging
import os
import time

import pyperclip
import pytest

import core.pipeline as pipeline
from config.settings import TOKEN_NAME
from core.exceptions import ParseError, ReadError
from core.models import DualConditionPolicy, TieredPolicy
from core.pipeline import WalletProfitSession, compute, default_policy
from services.exporter import ResultExporter, output_filename
from services.parser import read_source


@pytest.fixture
def session(sample_csv_bytes):
    s = WalletProfitSession(DualConditionPolicy(1000, 5), "梗王")
    assert s.import_bytes(sample_csv_bytes, "Top收益.csv")
    return s


def test_compute_end_to_end(session):
    artifact = session.artifact

    assert session.record_count == 5
    assert artifact.record_count == 5
    assert artifact.text.splitlines() == [
        "0x5b1b2276367dcac82dbd20d5acd2052d703c4444:梗王盈利444",
        "0xccc0000000000000000000000000000000000333:梗王盈利333",
        "0xbbb0000000000000000000000000000000000222:梗王盈利222",
    ]


def test_policy_change_recomputes(session):
    session.set_policy(TieredPolicy(10, 5))
    assert session.artifact.tier_counts() == (2, 2)

    session.set_policy(DualConditionPolicy(100000, 0))
    assert session.artifact.is_empty


def test_token_name_change_recomputes(session):
    session.token_name = "狗王"
    assert session.artifact.text.startswith("0x5b1b2276367dcac82dbd20d5acd2052d703c4444:狗王盈利444")


def test_blank_token_name_falls_back_to_default():
    s = WalletProfitSession(token_name="   ")
    assert s.token_name == TOKEN_NAME


def test_default_policy_modes():
    assert isinstance(default_policy("tiered"), TieredPolicy)
    assert isinstance(default_policy("dual"), DualConditionPolicy)


def test_import_replaces_dataset(session):
    data = b"h\n0xnew,1,1,1,1,1,1\n"
    assert session.import_bytes(data, "new.csv")
    assert [r.wallet for r in session.records] == ["0xnew"]
    assert session.source == "new.csv"


def test_parse_failure_keeps_prior_dataset(session, caplog):
    caplog.set_level(logging.INFO, logger="WalletProfitFilter")

    assert not session.import_bytes(b"\x00\x00garbage", "broken.csv")
    assert session.record_count == 5
    assert session.source == "Top收益.csv"
    assert isinstance(session.last_error, ParseError)
    assert "文件解析失败" in caplog.text


def test_read_failure_keeps_prior_dataset(session, tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="WalletProfitFilter")

    ok = asyncio.run(session.import_file(str(tmp_path / "missing.csv")))

    assert not ok
    assert session.record_count == 5
    assert isinstance(session.last_error, ReadError)
    assert "文件读取失败" in caplog.text


def test_import_file_reads_xlsx(sample_xlsx_file):
    s = WalletProfitSession(TieredPolicy(10, 5))
    assert asyncio.run(s.import_file(str(sample_xlsx_file)))
    assert s.source == "Top收益.xlsx"
    assert s.record_count == 3
    assert s.last_error is None


def test_newer_import_supersedes_slower_one(tmp_path, monkeypatch):
    slow = tmp_path / "slow.csv"
    fast = tmp_path / "fast.csv"
    slow.write_bytes(b"h\n0xslow,1,1,1,1,1,1\n")
    fast.write_bytes(b"h\n0xfast,1,1,1,1,1,1\n")

    def delayed_read(path):
        if path.endswith("slow.csv"):
            time.sleep(0.2)
        return read_source(path)

    monkeypatch.setattr(pipeline, "read_source", delayed_read)
    s = WalletProfitSession()

    async def scenario():
        return await asyncio.gather(s.import_file(str(slow)), s.import_file(str(fast)))

    assert asyncio.run(scenario()) == [False, True]
    assert s.source == "fast.csv"
    assert [r.wallet for r in s.records] == ["0xfast"]


def test_superseded_failing_import_leaves_no_error(tmp_path, monkeypatch, caplog):
    caplog.set_level(logging.INFO, logger="WalletProfitFilter")
    fast = tmp_path / "fast.csv"
    fast.write_bytes(b"h\n0xfast,1,1,1,1,1,1\n")

    def delayed_read(path):
        if path.endswith("slow.csv"):
            time.sleep(0.2)
        return read_source(path)

    monkeypatch.setattr(pipeline, "read_source", delayed_read)
    s = WalletProfitSession()

    async def scenario():
        return await asyncio.gather(s.import_file(str(tmp_path / "slow.csv")), s.import_file(str(fast)))

    assert asyncio.run(scenario()) == [False, True]
    assert s.source == "fast.csv"
    assert s.last_error is None
    assert "文件读取失败" not in caplog.text


def test_superseded_unparsable_import_leaves_no_error(tmp_path, monkeypatch):
    slow = tmp_path / "slow.xlsx"
    fast = tmp_path / "fast.csv"
    slow.write_bytes(b"PK\x03\x04broken")
    fast.write_bytes(b"h\n0xfast,1,1,1,1,1,1\n")

    def delayed_read(path):
        if path.endswith("slow.xlsx"):
            time.sleep(0.2)
        return read_source(path)

    monkeypatch.setattr(pipeline, "read_source", delayed_read)
    s = WalletProfitSession()

    async def scenario():
        return await asyncio.gather(s.import_file(str(slow)), s.import_file(str(fast)))

    assert asyncio.run(scenario()) == [False, True]
    assert s.last_error is None
    assert [r.wallet for r in s.records] == ["0xfast"]


def test_export_file_writes_utf8_text(session, tmp_path):
    output_file = session.export_file(str(tmp_path / "out"))

    assert output_file == os.path.join(str(tmp_path / "out"), "梗王_盈利分析结果.txt")
    with open(output_file, encoding="utf-8") as f:
        assert f.read() == session.artifact.text


def test_empty_artifact_is_never_exported(tmp_path, monkeypatch, caplog):
    caplog.set_level(logging.INFO, logger="WalletProfitFilter")
    copied = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)
    artifact = compute([], DualConditionPolicy(), "梗王")

    assert ResultExporter.export_file(artifact, str(tmp_path)) is None
    assert not ResultExporter.copy_to_clipboard(artifact)
    assert os.listdir(str(tmp_path)) == []
    assert copied == []
    assert "没有可复制的数据" in caplog.text
    assert "没有可下载的数据" in caplog.text


def test_copy_to_clipboard(session, monkeypatch):
    copied = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)

    assert session.copy_to_clipboard()
    assert copied == [session.artifact.text]


def test_clipboard_failure_is_reported(session, monkeypatch):
    def broken(text):
        raise pyperclip.PyperclipException("no clipboard")

    monkeypatch.setattr(pyperclip, "copy", broken)
    assert not session.copy_to_clipboard()


def test_output_filename_replaces_path_separators():
    assert output_filename("梗王") == "梗王_盈利分析结果.txt"
    assert output_filename("a/b") == "a_b_盈利分析结果.txt"
