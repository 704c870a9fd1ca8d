"""Tests for the YouTube playlist adapter."""

from unittest.mock import MagicMock, patch

import pytest
from googleapiclient.errors import HttpError

from catchup.adapters.youtube import YouTubePlaylistAdapter
from catchup.errors import ExternalCallError, MalformedEntryError


def playlist_item(n: int, published: str | None = "2021-09-26T11:30:00Z") -> dict:
    details = {"videoId": f"vid{n}"}
    if published:
        details["videoPublishedAt"] = published
    return {
        "id": f"item{n}",
        "snippet": {"title": f"Service {n}", "resourceId": {"videoId": f"vid{n}"}},
        "contentDetails": details,
    }


def http_error(status: int = 403) -> HttpError:
    return HttpError(MagicMock(status=status, reason="Forbidden"), b"quotaExceeded")


@pytest.fixture
def service():
    return MagicMock()


@pytest.fixture
def adapter(service):
    adapter = YouTubePlaylistAdapter(playlist_id="PLtest", region="GB")
    with patch.object(YouTubePlaylistAdapter, "_build_service", return_value=service):
        yield adapter


class TestFetchAll:
    def test_follows_every_page(self, adapter, service):
        service.playlistItems().list().execute.side_effect = [
            {"items": [playlist_item(1), playlist_item(2)], "nextPageToken": "p2"},
            {"items": [playlist_item(3)], "nextPageToken": "p3"},
            {"items": [playlist_item(4)]},
        ]
        service.videos().list().execute.return_value = {"items": []}

        items = adapter.fetch_items()

        assert [i["id"] for i in items] == ["item1", "item2", "item3", "item4"]
        list_mock = service.playlistItems.return_value.list
        list_mock.assert_any_call(
            part="snippet,contentDetails", playlistId="PLtest", maxResults=50, pageToken=None
        )
        list_mock.assert_any_call(
            part="snippet,contentDetails", playlistId="PLtest", maxResults=50, pageToken="p3"
        )

    def test_maps_videos_to_entries(self, adapter, service):
        service.playlistItems().list().execute.return_value = {
            "items": [playlist_item(1), playlist_item(2, published=None), playlist_item(3)]
        }
        service.videos().list().execute.return_value = {
            "items": [
                {
                    "id": "vid1",
                    "liveStreamingDetails": {
                        "scheduledStartTime": "2021-09-26T10:25:00Z",
                        "actualStartTime": "2021-09-26T10:27:13Z",
                    },
                    "status": {"privacyStatus": "public"},
                },
                {
                    "id": "vid3",
                    "contentDetails": {"regionRestriction": {"blocked": ["GB"]}},
                },
            ]
        }

        entries = adapter.fetch_all()

        assert [e.entry_id for e in entries] == ["item1", "item2", "item3"]
        assert entries[0].viewable() is True
        assert entries[0].actual_start_time.isoformat() == "2021-09-26T10:27:13+00:00"
        # vid2 missing from videos.list: deleted or private
        assert entries[1].blocked is True
        assert entries[2].blocked is True
        assert entries[2].available() is True

    def test_video_id_from_snippet_only(self, adapter, service):
        item = {
            "id": "item1",
            "snippet": {"title": "Service 1", "resourceId": {"videoId": "vid1"}},
            "contentDetails": {"videoPublishedAt": "2021-09-26T11:30:00Z"},
        }
        service.playlistItems().list().execute.return_value = {"items": [item]}
        service.videos().list().execute.return_value = {
            "items": [{"id": "vid1", "status": {"privacyStatus": "public"}}]
        }

        entries = adapter.fetch_all()

        assert entries[0].video_id == "vid1"
        assert entries[0].blocked is False
        assert entries[0].viewable() is True
        calls = [c for c in service.videos.return_value.list.call_args_list if c.kwargs]
        assert calls[0].kwargs["id"] == "vid1"

    def test_videos_fetched_in_batches_of_fifty(self, adapter, service):
        service.videos().list().execute.return_value = {"items": []}
        ids = [f"vid{i}" for i in range(120)]

        adapter.fetch_videos(ids)

        calls = [c for c in service.videos.return_value.list.call_args_list if c.kwargs]
        assert len(calls) == 3
        assert calls[0].kwargs["id"] == ",".join(ids[:50])
        assert calls[2].kwargs["id"] == ",".join(ids[100:])
        assert calls[0].kwargs["part"] == "liveStreamingDetails,contentDetails,status"

    def test_empty_playlist(self, adapter, service):
        service.playlistItems().list().execute.return_value = {"items": []}
        service.videos().list().execute.return_value = {"items": []}
        assert adapter.fetch_all() == []

    def test_api_error_raises(self, adapter, service):
        service.playlistItems().list().execute.side_effect = http_error()
        with pytest.raises(ExternalCallError, match="playlistItems.list"):
            adapter.fetch_all()

    def test_error_on_later_page_raises(self, adapter, service):
        service.playlistItems().list().execute.side_effect = [
            {"items": [playlist_item(1)], "nextPageToken": "p2"},
            http_error(500),
        ]
        with pytest.raises(ExternalCallError):
            adapter.fetch_all()

    def test_malformed_item_raises(self, adapter, service):
        bad = playlist_item(1)
        del bad["snippet"]["title"]
        service.playlistItems().list().execute.return_value = {"items": [bad]}
        service.videos().list().execute.return_value = {"items": []}
        with pytest.raises(MalformedEntryError):
            adapter.fetch_all()


class TestMutations:
    def test_set_position_uses_fetched_video_id(self, adapter, service):
        service.playlistItems().list().execute.return_value = {"items": [playlist_item(7)]}
        service.videos().list().execute.return_value = {"items": []}
        adapter.fetch_all()

        adapter.set_position("item7", 3)

        service.playlistItems.return_value.update.assert_called_with(
            part="snippet",
            body={
                "id": "item7",
                "snippet": {
                    "playlistId": "PLtest",
                    "resourceId": {"kind": "youtube#video", "videoId": "vid7"},
                    "position": 3,
                },
            },
        )

    def test_set_position_looks_up_unknown_item(self, adapter, service):
        service.playlistItems().list().execute.return_value = {
            "items": [{"id": "item9", "contentDetails": {"videoId": "vid9"}}]
        }

        adapter.set_position("item9", 0)

        service.playlistItems.return_value.list.assert_called_with(part="contentDetails", id="item9")
        body = service.playlistItems.return_value.update.call_args.kwargs["body"]
        assert body["snippet"]["resourceId"]["videoId"] == "vid9"

    def test_set_position_missing_item(self, adapter, service):
        service.playlistItems().list().execute.return_value = {"items": []}
        with pytest.raises(ExternalCallError, match="not found"):
            adapter.set_position("gone", 0)

    def test_delete(self, adapter, service):
        adapter.delete("item4")
        service.playlistItems.return_value.delete.assert_called_with(id="item4")

    def test_delete_error_raises(self, adapter, service):
        service.playlistItems().delete().execute.side_effect = http_error(404)
        with pytest.raises(ExternalCallError, match="playlistItems.delete"):
            adapter.delete("item4")


class TestCredentials:
    def test_no_credentials_configured(self):
        adapter = YouTubePlaylistAdapter(playlist_id="PLtest")
        with pytest.raises(ExternalCallError, match="catchup auth"):
            adapter.fetch_all()

    def test_missing_service_account_file(self, tmp_path):
        adapter = YouTubePlaylistAdapter(
            playlist_id="PLtest", service_account_file=str(tmp_path / "nope.json")
        )
        with pytest.raises(ExternalCallError, match="not found"):
            adapter.fetch_all()

    def test_authenticate_without_client_secret(self, tmp_path):
        adapter = YouTubePlaylistAdapter(playlist_id="PLtest", token_file=str(tmp_path / "token.json"))
        assert adapter.authenticate() is False
