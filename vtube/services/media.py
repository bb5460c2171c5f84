import logging
import uuid
from pathlib import Path

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

logger = logging.getLogger(__name__)


class MediaStorage:
    """Cloudinary client holding its own credentials.

    Credentials are passed with every SDK call, so several storages with
    different accounts can live in the same process.
    """

    def __init__(self, cloud_name: str, api_key: str, api_secret: str, folder: str = None):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder

    @classmethod
    def from_config(cls, config) -> "MediaStorage":
        return cls(
            cloud_name=config.get("CLOUDINARY_CLOUD_NAME"),
            api_key=config.get("CLOUDINARY_API_KEY"),
            api_secret=config.get("CLOUDINARY_API_SECRET"),
            folder=config.get("CLOUDINARY_FOLDER"),
        )

    def _credentials(self) -> dict:
        return {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
        }

    def upload(self, local_path: Path) -> dict | None:
        """Upload a local file and delete it afterwards.

        Returns the Cloudinary response (``secure_url``, ``public_id``,
        ``duration`` for videos...) or None when the file is missing or the
        upload fails.
        """
        if not local_path:
            return None
        local_path = Path(local_path)
        if not local_path.exists():
            logger.warning(f"Cannot upload missing file {local_path}")
            return None

        options = {"resource_type": "auto", "public_id": uuid.uuid4().hex}
        if self.folder:
            options["folder"] = self.folder

        try:
            result = cloudinary.uploader.upload(str(local_path), **options, **self._credentials())
            logger.info(f"Uploaded {local_path.name} as {result.get('public_id')}")
            return result
        except CloudinaryError as e:
            logger.warning(f"Failed to upload {local_path.name}: {e}")
            return None
        finally:
            local_path.unlink(missing_ok=True)

    def delete(self, public_id: str, resource_type: str = "image") -> dict | None:
        if not public_id:
            logger.warning("No public id given, nothing to delete")
            return None
        try:
            return cloudinary.uploader.destroy(public_id, resource_type=resource_type, **self._credentials())
        except CloudinaryError as e:
            logger.warning(f"Failed to delete {public_id}: {e}")
            return None
