"""Source verification against Etherscan-compatible explorers."""

import json
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Protocol, Sequence

import requests
import structlog

from .abi import encode_constructor_args
from .artifacts import load_artifact, load_build_info
from .exceptions import AlreadyVerifiedError, VerificationError

logger = structlog.get_logger()

PENDING_STATUS = "Pending in queue"
PASS_STATUS = "Pass - Verified"


class Verifier(Protocol):
    """Verification capability used by tasks."""

    def verify(self, address: str, args: Sequence[Any]) -> None: ...


def _is_already_verified(message: str) -> bool:
    return "already verified" in message.lower()


class EtherscanVerifier:
    """Submits standard-JSON-input verification requests to an Etherscan v2 API."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        chain_id: int,
        artifacts_dir: Path,
        contract_name: str,
        timeout: float = 30,
        poll_interval: float = 5.0,
        max_attempts: int = 10,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.chain_id = chain_id
        self.artifacts_dir = Path(artifacts_dir)
        self.contract_name = contract_name
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self._sleep = sleep

    def _request(
        self,
        method: str,
        params: Dict[str, Any],
        data: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        query = {"chainid": self.chain_id, **params}
        if data is None:
            query["apikey"] = self.api_key
        else:
            data = {"apikey": self.api_key, **data}

        try:
            response = requests.request(
                method, self.api_url, params=query, data=data, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise VerificationError(f"Network error talking to explorer: {e}") from e

        if response.status_code != 200:
            raise VerificationError(f"Explorer request failed with status {response.status_code}")

        try:
            result = response.json()
        except ValueError as e:
            raise VerificationError(f"Explorer returned invalid JSON: {response.text[:200]}") from e

        if not isinstance(result, dict):
            raise VerificationError(f"Unexpected explorer response: {result!r}")
        return result

    def submit(self, address: str, args: Sequence[Any]) -> str:
        """
        Submit a verification request.

        Args:
            address: Deployed contract address
            args: Constructor arguments used at deployment

        Returns:
            GUID to poll with check_status

        Raises:
            AlreadyVerifiedError: If the explorer already has the source
            VerificationError: If the explorer rejects the request
        """
        artifact = load_artifact(self.artifacts_dir, self.contract_name)
        build_info = load_build_info(self.artifacts_dir, self.contract_name)
        encoded_args = encode_constructor_args(artifact.abi, args).hex()

        result = self._request(
            "POST",
            {"module": "contract", "action": "verifysourcecode"},
            data={
                "contractaddress": address,
                "sourceCode": json.dumps(build_info.input),
                "codeformat": "solidity-standard-json-input",
                "contractname": f"{artifact.source_name}:{artifact.contract_name}",
                "compilerversion": f"v{build_info.solc_long_version}",
                # Field name is misspelled in the Etherscan API
                "constructorArguements": encoded_args,
            },
        )

        message = str(result.get("result") or "")
        if str(result.get("status")) != "1":
            if _is_already_verified(message):
                raise AlreadyVerifiedError(f"Contract {address} is already verified")
            raise VerificationError(f"Verification request for {address} rejected: {message}")

        logger.info("verification_submitted", address=address, guid=message)
        return message

    def check_status(self, guid: str) -> str:
        """Return the explorer's status message for a submitted verification."""
        result = self._request(
            "GET",
            {"module": "contract", "action": "checkverifystatus", "guid": guid},
        )
        return str(result.get("result") or "")

    def verify(self, address: str, args: Sequence[Any]) -> None:
        """
        Verify a deployed contract and wait for the explorer's verdict.

        Raises:
            AlreadyVerifiedError: If the explorer already has the source
            VerificationError: If verification fails or stays pending too long
        """
        logger.info("verifying_contract", address=address, chain_id=self.chain_id)
        guid = self.submit(address, args)

        for attempt in range(self.max_attempts):
            status = self.check_status(guid)
            if status == PASS_STATUS:
                logger.info("contract_verified", address=address)
                return
            if _is_already_verified(status):
                raise AlreadyVerifiedError(f"Contract {address} is already verified")
            if status != PENDING_STATUS:
                raise VerificationError(f"Verification of {address} failed: {status}")

            if attempt + 1 < self.max_attempts:
                self._sleep(self.poll_interval)

        raise VerificationError(
            f"Verification of {address} still pending after {self.max_attempts} checks"
        )

    def is_verified(self, address: str) -> Optional[bool]:
        """
        Ask the explorer whether source is published for an address.

        Returns:
            True if verified, False if explicitly not verified,
            None if the explorer answer is an error or unexpected
        """
        data = self._request(
            "GET",
            {"module": "contract", "action": "getsourcecode", "address": address},
        )

        # Explorers report errors and rate limits with status 0
        if str(data.get("status")) == "0":
            return None

        result = data.get("result")
        if not isinstance(result, list) or not result or not isinstance(result[0], dict):
            return None

        record = result[0]
        abi_str = str(record.get("ABI") or "")
        if "not verified" in abi_str.lower():
            return False

        return bool(str(record.get("SourceCode") or "").strip() and abi_str)
