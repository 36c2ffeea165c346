"""
Keuangan / 거래 로그 API 테스트

게시 → 조회 → 수정 → 정산 → 삭제 흐름
"""

import httpx
import pytest

from core.ledger import TransactionLogStore


async def _post_batch(client: httpx.AsyncClient, periode: str, entries: list[dict]) -> httpx.Response:
    return await client.post(
        "/api/keuangan/transaksi",
        json={"periode": periode, "admin_nama": "Budi", "entries": entries},
    )


class TestPostBatch:
    """POST /api/keuangan/transaksi"""

    @pytest.mark.asyncio
    async def test_post_and_read(self, client: httpx.AsyncClient) -> None:
        response = await _post_batch(
            client,
            "2024-01",
            [{"no_anggota": "ak-001", "transaksi_simpanan_wajib": "100000"}],
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success_count"] == 1
        assert body["error_count"] == 0
        assert body["log_failures"] == 0

        current = await client.get("/api/keuangan/AK-001")
        assert current.status_code == 200
        assert current.json()["akhir_simpanan_wajib"] == "100000"

        logs = await client.get("/api/transaksi-log", params={"no_anggota": "AK-001"})
        assert len(logs.json()) == 1
        assert logs.json()[0]["log_type"] == "NEW"

    @pytest.mark.asyncio
    async def test_log_write_failure_keeps_posting(
        self, client: httpx.AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """로그 기록이 실패해도 게시는 성공으로 유지"""

        async def _fail(self, *args, **kwargs):
            raise RuntimeError("log table locked")

        monkeypatch.setattr(TransactionLogStore, "create_log", _fail)

        response = await _post_batch(
            client,
            "2024-01",
            [{"no_anggota": "AK-001", "transaksi_simpanan_wajib": "100000"}],
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success_count"] == 1
        assert body["error_count"] == 0
        assert body["log_failures"] == 1

        current = await client.get("/api/keuangan/AK-001")
        assert current.json()["akhir_simpanan_wajib"] == "100000"
        report = await client.get("/api/keuangan/AK-001/laporan/2024-01")
        assert report.status_code == 200
        assert report.json()["transaksi_simpanan_wajib"] == "100000"
        logs = await client.get("/api/transaksi-log", params={"no_anggota": "AK-001"})
        assert logs.json() == []

    @pytest.mark.asyncio
    async def test_invalid_period(self, client: httpx.AsyncClient) -> None:
        response = await _post_batch(client, "2024-13", [{"no_anggota": "AK-001"}])

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_negative_amount_rejected(self, client: httpx.AsyncClient) -> None:
        response = await _post_batch(
            client, "2024-01", [{"no_anggota": "AK-001", "transaksi_niaga": "-1"}]
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_partial_failure_reported(self, client: httpx.AsyncClient) -> None:
        response = await _post_batch(
            client,
            "2024-01",
            [{"no_anggota": "AK-001", "transaksi_niaga": "1"}, {"no_anggota": ""}],
        )

        body = response.json()
        assert body["success_count"] == 1
        assert body["error_count"] == 1
        periods = await client.get("/api/keuangan/periode")
        assert periods.json()["periods"] == []


class TestReports:
    """보고서 조회/삭제"""

    @pytest.mark.asyncio
    async def test_list_current_ledgers(self, client: httpx.AsyncClient) -> None:
        """전체 회원 현재 장부, 회원번호 순"""
        empty = await client.get("/api/keuangan")
        assert empty.status_code == 200
        assert empty.json() == []

        await _post_batch(
            client,
            "2024-01",
            [
                {"no_anggota": "AK-002", "transaksi_simpanan_wajib": "50"},
                {"no_anggota": "AK-001", "transaksi_simpanan_wajib": "100"},
            ],
        )

        response = await client.get("/api/keuangan")
        body = response.json()
        assert [r["no_anggota"] for r in body] == ["AK-001", "AK-002"]
        assert body[0]["akhir_simpanan_wajib"] == "100"
        assert body[1]["periode"] == "2024-01"

    @pytest.mark.asyncio
    async def test_periods_and_monthly_report(self, client: httpx.AsyncClient) -> None:
        await _post_batch(client, "2024-01", [{"no_anggota": "AK-001", "transaksi_simpanan_wajib": "100"}])
        await _post_batch(client, "2024-02", [{"no_anggota": "AK-001", "transaksi_simpanan_wajib": "50"}])

        posted = await client.get("/api/keuangan/periode")
        member_periods = await client.get("/api/keuangan/AK-001/laporan")
        report = await client.get("/api/keuangan/AK-001/laporan/2024-02")

        assert posted.json()["periods"] == ["2024-02", "2024-01"]
        assert member_periods.json()["periods"] == ["2024-02", "2024-01"]
        assert report.json()["awal_simpanan_wajib"] == "100"
        assert report.json()["akhir_simpanan_wajib"] == "150"

    @pytest.mark.asyncio
    async def test_report_not_found(self, client: httpx.AsyncClient) -> None:
        assert (await client.get("/api/keuangan/AK-404")).status_code == 404
        assert (await client.get("/api/keuangan/AK-404/laporan/2024-01")).status_code == 404
        assert (await client.get("/api/keuangan/AK-404/laporan/2024-1")).status_code == 422

    @pytest.mark.asyncio
    async def test_delete_report(self, client: httpx.AsyncClient) -> None:
        await _post_batch(client, "2024-01", [{"no_anggota": "AK-001", "transaksi_simpanan_wajib": "100"}])
        await _post_batch(client, "2024-02", [{"no_anggota": "AK-001", "transaksi_simpanan_wajib": "50"}])

        response = await client.delete("/api/keuangan/laporan/2024-02")

        assert response.status_code == 200
        assert response.json() == {"periode": "2024-02", "members": ["AK-001"], "deleted_logs": 1}
        current = await client.get("/api/keuangan/AK-001")
        assert current.json()["periode"] == "2024-01"

    @pytest.mark.asyncio
    async def test_rebuild_periods(self, client: httpx.AsyncClient) -> None:
        await _post_batch(client, "2024-01", [{"no_anggota": "AK-001", "transaksi_niaga": "1"}])

        response = await client.post("/api/keuangan/periode/rebuild")

        assert response.json()["periods"] == ["2024-01"]


class TestCorrection:
    """POST /api/keuangan/koreksi/{log_id}"""

    @pytest.mark.asyncio
    async def test_correct_cascades(self, client: httpx.AsyncClient) -> None:
        await _post_batch(client, "2024-01", [{"no_anggota": "AK-001", "transaksi_simpanan_wajib": "100000"}])
        await _post_batch(
            client,
            "2024-02",
            [
                {
                    "no_anggota": "AK-001",
                    "transaksi_simpanan_wajib": "50000",
                    "transaksi_pengambilan_simpanan_wajib": "20000",
                }
            ],
        )
        logs = await client.get("/api/transaksi-log", params={"periode": "2024-01"})
        log_id = logs.json()[0]["log_id"]

        response = await client.post(
            f"/api/keuangan/koreksi/{log_id}",
            json={"editor": "Ani", "transaksi_simpanan_wajib": "80000"},
        )

        assert response.status_code == 200
        assert response.json()["recomputed_periods"] == ["2024-01", "2024-02"]
        current = await client.get("/api/keuangan/AK-001")
        assert current.json()["akhir_simpanan_wajib"] == "110000"
        log = await client.get(f"/api/transaksi-log/{log_id}")
        assert log.json()["log_type"] == "EDIT"

    @pytest.mark.asyncio
    async def test_unknown_log(self, client: httpx.AsyncClient) -> None:
        response = await client.post(
            "/api/keuangan/koreksi/missing", json={"editor": "Ani"}
        )

        assert response.status_code == 404


class TestTransaksiLog:
    """거래 로그 API"""

    @pytest.mark.asyncio
    async def test_rekap(self, client: httpx.AsyncClient) -> None:
        await _post_batch(
            client,
            "2024-01",
            [
                {"no_anggota": "AK-001", "transaksi_simpanan_wajib": "100000"},
                {"no_anggota": "AK-002", "transaksi_simpanan_wajib": "50000", "transaksi_dana_perlaya": "5000"},
            ],
        )

        response = await client.get(
            "/api/transaksi-log/rekap", params={"admin_nama": "Budi", "periode": "2024-01"}
        )

        body = response.json()
        assert body["total_setoran"] == "155000"
        assert len(body["logs"]) == 2

    @pytest.mark.asyncio
    async def test_log_periods(self, client: httpx.AsyncClient) -> None:
        await _post_batch(client, "2024-03", [{"no_anggota": "AK-001", "transaksi_niaga": "1"}])

        response = await client.get("/api/transaksi-log/periode")

        assert response.json()["periods"] == ["2024-03"]

    @pytest.mark.asyncio
    async def test_sync_nothing_missing(self, client: httpx.AsyncClient) -> None:
        await _post_batch(client, "2024-01", [{"no_anggota": "AK-001", "transaksi_niaga": "1"}])

        response = await client.post("/api/transaksi-log/sync")

        assert response.json() == {"created": 0, "zero_movement": []}

    @pytest.mark.asyncio
    async def test_log_not_found(self, client: httpx.AsyncClient) -> None:
        assert (await client.get("/api/transaksi-log/missing")).status_code == 404
