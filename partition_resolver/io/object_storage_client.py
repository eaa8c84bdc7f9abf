from __future__ import annotations

from typing import Iterator

from oci.auth.signers import InstancePrincipalsSecurityTokenSigner
from oci.config import from_file
from oci.object_storage import ObjectStorageClient
from oci.signer import Signer


class OCIObjectStorageClient:
    """
    Thin wrapper over Oracle Cloud Infrastructure (OCI) Object Storage.

    Exposes exactly the operations the object-storage filesystem needs:
    paginated key listing, whole-object reads, uploads and deletes.

    Authentication modes:
      - "instance_principal":
          Uses the OCI Instance Principal of the current Compute instance.
          Suitable only when running on OCI infrastructure.
      - "api_key":
          Uses a user-scoped OCI API key (private PEM key + config file).
          Suitable for local development, CI, and non-OCI environments.

    Errors raised by the SDK (``oci.exceptions.ServiceError`` and friends)
    are not caught here; retry policy belongs to the caller.
    """

    def __init__(
        self,
        *,
        region: str | None = None,
        auth_mode: str = "instance_principal",
        oci_config_file: str | None = None,
        oci_profile: str = "DEFAULT",
    ) -> None:
        if auth_mode == "instance_principal":
            signer = InstancePrincipalsSecurityTokenSigner()
            config = {}

        elif auth_mode == "api_key":
            if oci_config_file is None:
                raise ValueError("oci_config_file is required for api_key auth")

            config = from_file(
                file_location=oci_config_file,
                profile_name=oci_profile,
            )
            signer = Signer(
                tenancy=config["tenancy"],
                user=config["user"],
                fingerprint=config["fingerprint"],
                private_key_file_location=config["key_file"],
                pass_phrase=config.get("pass_phrase"),
            )

        else:
            raise ValueError(f"Unknown auth_mode: {auth_mode}")

        client_kwargs = {}
        if region:
            client_kwargs["region"] = region

        self.client = ObjectStorageClient(
            config=config,
            signer=signer,
            **client_kwargs,
        )

        self.namespace = self.client.get_namespace().data

    def iter_keys(self, bucket: str, prefix: str | None = None, page_size: int = 1000) -> Iterator[str]:
        """
        Yield every object name in ``bucket`` starting with ``prefix``.

        Follows OCI's ``next_start_with`` pagination until exhausted.
        """
        kwargs = {
            "namespace_name": self.namespace,
            "bucket_name": bucket,
            "limit": page_size,
        }
        if prefix:
            kwargs["prefix"] = prefix

        while True:
            resp = self.client.list_objects(**kwargs)
            for obj in resp.data.objects or []:
                yield obj.name

            next_start = getattr(resp.data, "next_start_with", None)
            if not next_start:
                return
            kwargs["start"] = next_start

    def get_bytes(self, bucket: str, key: str) -> bytes:
        """
        Download an object into memory.

        The OCI SDK exposes response bodies in different shapes depending
        on transport and SDK version; they are normalized to bytes here.
        """
        resp = self.client.get_object(
            namespace_name=self.namespace,
            bucket_name=bucket,
            object_name=key,
        )
        d = resp.data

        if hasattr(d, "content"):
            return d.content

        if hasattr(d, "raw") and hasattr(d.raw, "stream"):
            return b"".join(d.raw.stream(1024 * 1024, decode_content=False))

        if hasattr(d, "read") and callable(d.read):
            return d.read()

        raise TypeError("Unsupported OCI get_object response type; no readable data attribute found.")

    def put_bytes(
        self,
        bucket: str,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> None:
        self.client.put_object(
            namespace_name=self.namespace,
            bucket_name=bucket,
            object_name=key,
            put_object_body=data,
            content_type=content_type,
        )

    def delete_object(self, bucket: str, key: str) -> None:
        self.client.delete_object(
            namespace_name=self.namespace,
            bucket_name=bucket,
            object_name=key,
        )
