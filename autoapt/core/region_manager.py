"""
Region Manager Module
=====================

Scans RDS instances across several AWS regions in parallel and merges
the per-region results into one mapping.

This module handles:
- Fan-out of one worker thread per region
- Lock-protected aggregation of per-region results
- Isolation of per-region failures
- Progress reporting through an optional callback

Classes
-------
RegionManager
    Orchestrates the multi-region database scan.

Example
-------
>>> from autoapt.core.region_manager import RegionManager
>>>
>>> manager = RegionManager(profile="audit")
>>> databases = manager.scan_all_regions()
>>> for region, records in databases.items():
...     print(region, len(records))

Notes
-----
A region whose scan is denied access appears in the result with an empty
list. A region whose scan fails for any other reason is left out of the
result entirely; the failure is logged and passed to the progress
callback as ``"error"``, but the mapping itself does not record it.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, Dict, List, Optional, Sequence

from autoapt.core.aws_client import AWSClient
from autoapt.core.records import DatabaseRecord
from autoapt.scanners.database_scanner import scan_region

logger = logging.getLogger(__name__)

DEFAULT_REGIONS = (
    "us-east-1",
    "us-east-2",
    "us-west-1",
    "us-west-2",
    "eu-west-1",
    "eu-central-1",
    "ap-northeast-1",
    "ap-southeast-1",
)

ProgressCallback = Callable[[str, str], None]


class RegionManager:
    """
    Manages the multi-region database scan.

    Parameters
    ----------
    profile : str, optional
        AWS profile name from ~/.aws/credentials.
    max_retries : int, default=3
        Maximum attempts for failed API calls.
    timeout : int, default=30
        Connect and read timeout in seconds.
    client_factory : callable, optional
        Returns a region-scoped ``AWSClient`` for a region name. Defaults
        to :meth:`get_client_for_region`.

    Examples
    --------
    Scan the default regions:

    >>> manager = RegionManager()
    >>> result = manager.scan_all_regions()

    Scan specific regions with progress tracking:

    >>> def on_progress(region, status):
    ...     print(f"{region}: {status}")
    ...
    >>> result = manager.scan_all_regions(
    ...     ["us-east-1", "eu-west-1"],
    ...     progress_callback=on_progress,
    ... )

    Notes
    -----
    Each region runs in its own thread with its own ``AWSClient``. The
    only state shared between threads is the result mapping, and it is
    written under a lock.
    """

    def __init__(
        self,
        profile: Optional[str] = None,
        max_retries: int = 3,
        timeout: int = 30,
        client_factory: Optional[Callable[[str], AWSClient]] = None,
    ) -> None:
        self.profile = profile
        self.max_retries = max_retries
        self.timeout = timeout
        self.client_factory = client_factory or self.get_client_for_region

        logger.debug(f"Initialized RegionManager (profile={profile})")

    def get_client_for_region(self, region: str) -> AWSClient:
        """
        Create an AWSClient configured for ``region``.

        Example
        -------
        >>> client = manager.get_client_for_region("eu-west-1")
        >>> client.region
        'eu-west-1'
        """
        return AWSClient(
            region=region,
            profile=self.profile,
            max_retries=self.max_retries,
            timeout=self.timeout,
        )

    def _scan_region(
        self,
        region: str,
        results: Dict[str, List[DatabaseRecord]],
        lock: threading.Lock,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> None:
        """
        Worker body: scan ``region`` and store its records.

        Never raises. On failure the region is not written to ``results``.
        A failing progress callback is logged and does not affect the scan.
        """
        self._notify(progress_callback, region, "scanning")

        try:
            records = scan_region(region, self.client_factory)
        except Exception as e:
            logger.warning(f"Error scanning region {region}: {e}")
            self._notify(progress_callback, region, "error")
            return

        with lock:
            results[region] = records

        self._notify(progress_callback, region, "complete")

    @staticmethod
    def _notify(
        progress_callback: Optional[ProgressCallback],
        region: str,
        status: str,
    ) -> None:
        if progress_callback is None:
            return
        try:
            progress_callback(region, status)
        except Exception:
            logger.warning(
                f"Progress callback failed for region {region} ({status})",
                exc_info=True,
            )

    def scan_all_regions(
        self,
        regions: Optional[Sequence[str]] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> Dict[str, List[DatabaseRecord]]:
        """
        Scan every region in parallel and wait for all of them.

        Parameters
        ----------
        regions : sequence of str, optional
            Regions to scan. Defaults to :data:`DEFAULT_REGIONS`.
        progress_callback : callable, optional
            Called from worker threads with ``(region, status)``, status
            being one of 'scanning', 'complete', 'error'.

        Returns
        -------
        dict
            Region name to its DB instances, in API order. Access-denied
            regions map to an empty list; failed regions are absent.
        """
        if regions is None:
            regions = DEFAULT_REGIONS
        regions = list(regions)

        results: Dict[str, List[DatabaseRecord]] = {}
        if not regions:
            return results

        lock = threading.Lock()

        logger.info(f"Starting RDS scan across {len(regions)} regions")

        with ThreadPoolExecutor(
            max_workers=len(regions),
            thread_name_prefix="region-scan",
        ) as executor:
            futures = [
                executor.submit(
                    self._scan_region, region, results, lock, progress_callback
                )
                for region in regions
            ]
            wait(futures)

        for region, future in zip(regions, futures):
            error = future.exception()
            if error is not None:
                logger.error(
                    f"Worker for region {region} failed: {error!r}",
                    exc_info=error,
                )

        dropped = [r for r in regions if r not in results]
        logger.info(
            f"RDS scan complete: {len(results)} of {len(regions)} regions reported"
        )
        if dropped:
            logger.warning(f"Regions left out of the report: {', '.join(dropped)}")

        return results

    def __repr__(self) -> str:
        return f"RegionManager(profile={self.profile!r})"
