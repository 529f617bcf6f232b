"""Supabase Storage adapter for participant photos."""

from dataclasses import dataclass

from supabase import Client

from team_wrapped.services.photos import PhotoStorage


@dataclass
class SupabasePhotoStorage(PhotoStorage):
    """Uploads photos to a public Supabase Storage bucket."""

    client: Client
    bucket: str

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Store the payload and return its public URL."""
        bucket = self.client.storage.from_(self.bucket)
        bucket.upload(
            path=path,
            file=content,
            file_options={"content-type": content_type, "upsert": "false"},
        )
        return bucket.get_public_url(path)
