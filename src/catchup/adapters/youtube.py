"""YouTube Data API playlist adapter."""

import logging
from pathlib import Path

from catchup.core.entries import Entry, video_id_of
from catchup.errors import ExternalCallError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/youtube"]
PAGE_SIZE = 50  # API maximum for both playlistItems.list and videos.list


class YouTubePlaylistAdapter:
    """
    Reads and mutates one playlist via the YouTube Data API.

    Implements the EntrySource and EntrySink protocols. No business logic -
    just I/O. Every API failure is raised as ExternalCallError.
    """

    def __init__(
        self,
        playlist_id: str,
        region: str = "",
        token_file: str = "",
        service_account_file: str = "",
        client_secret_file: str = "",
    ):
        self.playlist_id = playlist_id
        self.region = region
        self.service_account_file = service_account_file
        self.client_secret_file = client_secret_file
        self._token_path = Path(token_file).expanduser() if token_file else None
        self._service = None
        self._video_ids: dict[str, str] = {}

    def _get_credentials(self):
        """Load user credentials from the token file, else a service account key."""
        from google.auth.transport.requests import Request
        from google.oauth2.credentials import Credentials

        if self._token_path and self._token_path.exists():
            creds = Credentials.from_authorized_user_file(str(self._token_path), SCOPES)
            if creds.expired and creds.refresh_token:
                creds.refresh(Request())
                self._token_path.write_text(creds.to_json())
                self._token_path.chmod(0o600)
            return creds

        if self.service_account_file:
            from google.oauth2 import service_account

            key_path = Path(self.service_account_file).expanduser()
            if not key_path.exists():
                raise ExternalCallError(f"Service account file not found: {key_path}")
            return service_account.Credentials.from_service_account_file(str(key_path), scopes=SCOPES)

        raise ExternalCallError("No YouTube credentials - run 'catchup auth' first")

    def _build_service(self):
        """Build (once) a YouTube Data API service."""
        if self._service is None:
            from google.auth.exceptions import GoogleAuthError
            from googleapiclient.discovery import build

            try:
                creds = self._get_credentials()
            except (GoogleAuthError, OSError, ValueError) as e:
                raise ExternalCallError(f"Failed to load YouTube credentials: {e}") from e
            self._service = build("youtube", "v3", credentials=creds)
        return self._service

    def _execute(self, request, what: str) -> dict:
        """Execute an API request, turning failures into ExternalCallError."""
        from googleapiclient.errors import HttpError

        try:
            return request.execute()
        except HttpError as e:
            raise ExternalCallError(f"YouTube API error during {what}: {e}") from e
        except OSError as e:
            raise ExternalCallError(f"Network error during {what}: {e}") from e

    def authenticate(self) -> bool:
        """Run OAuth flow and save the token. Returns True on success."""
        from google_auth_oauthlib.flow import InstalledAppFlow

        if not self.client_secret_file:
            logger.error("No client secret file configured")
            return False
        if not self._token_path:
            logger.error("No token file configured")
            return False

        secret_path = Path(self.client_secret_file).expanduser()
        if not secret_path.exists():
            logger.error(f"Client secret file not found: {secret_path}")
            return False

        flow = InstalledAppFlow.from_client_secrets_file(str(secret_path), SCOPES)
        creds = flow.run_local_server(port=0)

        self._token_path.parent.mkdir(parents=True, exist_ok=True)
        self._token_path.write_text(creds.to_json())
        self._token_path.chmod(0o600)
        return True

    def fetch_items(self) -> list[dict]:
        """Fetch raw playlist items, following nextPageToken to the last page."""
        service = self._build_service()
        items: list[dict] = []
        page_token = None
        while True:
            result = self._execute(
                service.playlistItems().list(
                    part="snippet,contentDetails",
                    playlistId=self.playlist_id,
                    maxResults=PAGE_SIZE,
                    pageToken=page_token,
                ),
                "playlistItems.list",
            )
            items.extend(result.get("items", []))
            page_token = result.get("nextPageToken")
            if not page_token:
                break
        logger.debug(f"Fetched {len(items)} items from playlist {self.playlist_id}")
        return items

    def fetch_videos(self, video_ids: list[str]) -> dict[str, dict]:
        """Fetch video resources by id, in batches. Missing videos are omitted."""
        service = self._build_service()
        videos: dict[str, dict] = {}
        for start in range(0, len(video_ids), PAGE_SIZE):
            batch = video_ids[start : start + PAGE_SIZE]
            result = self._execute(
                service.videos().list(
                    part="liveStreamingDetails,contentDetails,status",
                    id=",".join(batch),
                    maxResults=PAGE_SIZE,
                ),
                "videos.list",
            )
            for video in result.get("items", []):
                videos[video["id"]] = video
        return videos

    def fetch_all(self) -> list[Entry]:
        """Fetch every entry of the playlist in its current order."""
        items = self.fetch_items()
        video_ids = []
        for item in items:
            video_id = video_id_of(item)
            if video_id and video_id not in video_ids:
                video_ids.append(video_id)
        videos = self.fetch_videos(video_ids)

        entries = []
        for item in items:
            entries.append(Entry.from_api(item, videos.get(video_id_of(item)), self.region))
        self._video_ids = {e.entry_id: e.video_id for e in entries}
        return entries

    def _video_id_for(self, entry_id: str) -> str:
        if entry_id in self._video_ids:
            return self._video_ids[entry_id]

        service = self._build_service()
        result = self._execute(
            service.playlistItems().list(part="contentDetails", id=entry_id),
            "playlistItems.list",
        )
        items = result.get("items", [])
        if not items:
            raise ExternalCallError(f"Playlist item not found: {entry_id}")
        video_id = video_id_of(items[0])
        if not video_id:
            raise ExternalCallError(f"Playlist item has no video id: {entry_id}")
        self._video_ids[entry_id] = video_id
        return video_id

    def set_position(self, entry_id: str, index: int) -> None:
        """Move a playlist item to a zero-based position."""
        service = self._build_service()
        body = {
            "id": entry_id,
            "snippet": {
                "playlistId": self.playlist_id,
                "resourceId": {"kind": "youtube#video", "videoId": self._video_id_for(entry_id)},
                "position": index,
            },
        }
        self._execute(
            service.playlistItems().update(part="snippet", body=body),
            "playlistItems.update",
        )
        logger.debug(f"Moved {entry_id} to position {index}")

    def delete(self, entry_id: str) -> None:
        """Remove a playlist item."""
        service = self._build_service()
        self._execute(service.playlistItems().delete(id=entry_id), "playlistItems.delete")
        self._video_ids.pop(entry_id, None)
        logger.debug(f"Deleted {entry_id}")
