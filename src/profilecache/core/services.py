"""Core domain services for profilecache."""

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from pathlib import Path

from profilecache.core.exceptions import (
    MissingWorkingRootError,
    ProfileAlreadyActiveError,
    ResolverError,
    SyncIOError,
)
from profilecache.core.layout import artifact_id_of, locate
from profilecache.core.models import (
    RestoreReport,
    SaveReport,
    SwitchReport,
    SyncConfig,
    validate_profile,
)
from profilecache.core.ports import (
    IdentifierResolver,
    NullProgressReporter,
    ProgressReporter,
    RefreshableResolver,
    SnapshotStorePort,
)


logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _mtime(path: Path) -> datetime:
    """Get the modification time of a file as an aware UTC datetime."""
    return datetime.fromtimestamp(path.stat().st_mtime, tz=UTC)


class SyncEngine:
    """Synchronizes the working root with per-profile snapshot stores.

    Saving copies artifacts of the outgoing profile into its store, judging
    staleness against the store's marker. Restoring copies cached artifacts of
    the incoming profile back into the working root, deleting orphans and
    skipping entries whose source is not older than the cached copy.
    """

    def __init__(
        self,
        store: SnapshotStorePort,
        resolver: IdentifierResolver,
        clock: Clock | None = None,
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._clock = clock or _utc_now

    @classmethod
    def from_config(cls, config: SyncConfig) -> "SyncEngine":
        """Create a SyncEngine with the default adapters for a project config.

        Args:
            config: Resolved project configuration.

        Returns:
            SyncEngine backed by a SnapshotStore under config.data_root and the
            resolver selected by config.resolver.
        """
        from profilecache.adapters.resolvers import (
            MetaFileResolver,
            PathDigestResolver,
        )
        from profilecache.adapters.store import SnapshotStore

        resolver: IdentifierResolver
        if config.resolver == "digest":
            resolver = PathDigestResolver(config.assets_root, config.formats)
        else:
            resolver = MetaFileResolver(config.assets_root)

        return cls(store=SnapshotStore(config.data_root), resolver=resolver)

    @property
    def store(self) -> SnapshotStorePort:
        """The snapshot store this engine writes to."""
        return self._store

    def save_current_profile(
        self,
        profile: str,
        working_root: Path,
        assets: Iterable[Path],
        progress: ProgressReporter | None = None,
        *,
        dry_run: bool = False,
    ) -> SaveReport:
        """Snapshot the working root into a profile's store.

        Args:
            profile: The profile currently active, about to be superseded.
            working_root: The shared directory holding derived artifacts.
            assets: Source assets whose artifacts should be cached.
            progress: Optional progress reporter, one step per asset.
            dry_run: If True, compute and report decisions without writing.

        Returns:
            SaveReport describing what was copied, kept, or skipped.

        Raises:
            MissingWorkingRootError: If working_root does not exist.
            SyncIOError: If the store, a copy, or the marker fails. The marker
                is left unchanged and the remaining assets are not processed.
        """
        validate_profile(profile)
        if progress is None:
            progress = NullProgressReporter()

        if not working_root.is_dir():
            raise MissingWorkingRootError(working_root)

        if dry_run:
            store_root = self._store.store_path(profile)
        else:
            store_root = self._store.ensure_store(profile)

        # Staleness is judged against the marker as it was before this pass
        previous = self._store.read_marker(store_root, create=not dry_run)
        cached = self._store.index(store_root)

        asset_list = list(assets)
        outcomes: dict[str, list] = {
            "added": [],
            "updated": [],
            "unchanged": [],
            "missing": [],
            "unresolved": [],
        }
        seen: set[str] = set()

        phase = f"save:{profile}"
        # An aborted pass leaves its phase at the last reported count
        callback = progress.start_task(phase, len(asset_list))
        for done, asset in enumerate(asset_list, start=1):
            outcome = self._save_asset(
                asset,
                working_root,
                store_root,
                cached,
                previous,
                seen,
                dry_run=dry_run,
            )
            if outcome is not None:
                category, item = outcome
                outcomes[category].append(item)
            callback(done, len(asset_list))

        marker = previous
        if not dry_run:
            # Naive clock values are taken as local time
            now = self._clock().astimezone(UTC)
            marker = now if previous is None else max(previous, now)
            self._store.write_marker(store_root, marker)
        progress.finish_task(phase)

        report = SaveReport(
            profile=profile,
            store_root=store_root,
            added=outcomes["added"],
            updated=outcomes["updated"],
            unchanged=outcomes["unchanged"],
            missing=outcomes["missing"],
            unresolved=outcomes["unresolved"],
            marker=marker,
            dry_run=dry_run,
        )
        logger.info(
            "Saved profile '%s': %d added, %d updated, %d unchanged, "
            "%d missing, %d unresolved",
            profile,
            len(report.added),
            len(report.updated),
            len(report.unchanged),
            len(report.missing),
            len(report.unresolved),
        )
        return report

    def _save_asset(
        self,
        asset: Path,
        working_root: Path,
        store_root: Path,
        cached: dict[str, datetime],
        previous: datetime | None,
        seen: set[str],
        *,
        dry_run: bool,
    ) -> tuple[str, str | Path] | None:
        """Decide and perform the save of a single asset's artifact.

        Returns:
            (category, location or asset) for the report, or None for an
            artifact already handled earlier in the pass.
        """
        try:
            location = self._locate(asset)
        except ResolverError as e:
            logger.warning("Skipping %s: %s", asset, e)
            return "unresolved", asset

        if location in seen:
            return None
        seen.add(location)

        src = working_root / location
        dest = store_root / location

        if location not in cached:
            if not self._transfer(src, dest, dry_run=dry_run):
                logger.debug("No artifact for %s in working root", asset)
                return "missing", location
            logger.debug("Copying new cache entry %s for %s", location, asset)
            return "added", location

        try:
            source_modified = _mtime(asset)
        except FileNotFoundError:
            logger.warning("Skipping %s: source asset disappeared", asset)
            return "unresolved", asset

        if previous is not None and source_modified > previous:
            if not self._transfer(src, dest, dry_run=dry_run):
                logger.debug("No artifact for %s in working root", asset)
                return "missing", location
            logger.debug("Overwriting cached file %s for %s", location, asset)
            return "updated", location

        logger.debug("File is up to date in cache: %s", asset)
        return "unchanged", location

    def _locate(self, asset: Path) -> str:
        """Resolve an asset to its artifact location.

        Raises:
            ResolverError: If the resolver fails or returns an identifier
                that has no valid location.
        """
        artifact_id = self._resolver.resolve(asset)
        try:
            return locate(artifact_id)
        except ValueError as e:
            raise ResolverError(
                f"Resolver returned unusable identifier {artifact_id!r} for {asset}",
                asset=asset,
                cause=e,
            ) from e

    def _transfer(self, src: Path, dest: Path, *, dry_run: bool) -> bool:
        """Copy one artifact, returning False if the source artifact is absent."""
        if dry_run:
            return src.is_file()
        try:
            self._store.copy_artifact(src, dest)
        except FileNotFoundError:
            return False
        return True

    def restore_profile(
        self,
        profile: str,
        working_root: Path,
        progress: ProgressReporter | None = None,
        *,
        dry_run: bool = False,
    ) -> RestoreReport:
        """Fill the working root from a profile's store.

        Args:
            profile: The profile being switched to.
            working_root: The shared directory holding derived artifacts.
            progress: Optional progress reporter, one step per cached entry.
            dry_run: If True, compute and report decisions without writing.

        Returns:
            RestoreReport. store_found is False when the profile was never
            saved, in which case nothing is touched.

        Raises:
            SyncIOError: If indexing, a copy, or a delete fails.
        """
        validate_profile(profile)
        if progress is None:
            progress = NullProgressReporter()

        store_root = self._store.store_path(profile)
        if not self._store.exists(profile):
            logger.info("No cache for profile '%s'; nothing to restore", profile)
            return RestoreReport(
                profile=profile,
                store_root=store_root,
                store_found=False,
                dry_run=dry_run,
            )

        cached = self._store.index(store_root)
        restored: list[str] = []
        stale: list[str] = []
        orphaned: list[str] = []

        if isinstance(self._resolver, RefreshableResolver):
            # Assets may have come or gone since an earlier pass
            self._resolver.refresh()

        phase = f"restore:{profile}"
        callback = progress.start_task(phase, len(cached))
        for done, (location, cached_at) in enumerate(sorted(cached.items()), start=1):
            source_modified = self._live_source_mtime(location)

            if source_modified is None:
                logger.debug("Deleting orphaned cache entry %s", location)
                if not dry_run:
                    self._store.remove_artifact(store_root, location)
                orphaned.append(location)
            elif source_modified >= cached_at:
                # The host regenerates this one during the real switch
                logger.debug("Skipping stale cache entry %s", location)
                stale.append(location)
            else:
                logger.debug("Restoring %s into working root", location)
                if not dry_run:
                    self._restore_artifact(store_root, working_root, location)
                restored.append(location)

            callback(done, len(cached))
        progress.finish_task(phase)

        logger.info(
            "Restored profile '%s': %d restored, %d stale, %d orphaned",
            profile,
            len(restored),
            len(stale),
            len(orphaned),
        )
        return RestoreReport(
            profile=profile,
            store_root=store_root,
            restored=restored,
            stale=stale,
            orphaned=orphaned,
            dry_run=dry_run,
        )

    def _live_source_mtime(self, location: str) -> datetime | None:
        """Get the modification time of an artifact's live source, if any."""
        source = self._resolver.reverse_lookup(artifact_id_of(location))
        if source is None:
            return None
        try:
            return _mtime(source)
        except FileNotFoundError:
            return None

    def _restore_artifact(
        self, store_root: Path, working_root: Path, location: str
    ) -> None:
        src = store_root / location
        try:
            self._store.copy_artifact(src, working_root / location)
        except FileNotFoundError as e:
            raise SyncIOError(
                f"Cached artifact disappeared: {src}", path=src, cause=e
            ) from e

    def switch_profile(
        self,
        current: str | None,
        target: str,
        working_root: Path,
        assets: Iterable[Path],
        activate: Callable[[str], None],
        progress: ProgressReporter | None = None,
        *,
        fallback_uncached: bool = False,
    ) -> SwitchReport:
        """Save the current profile, restore the target, then activate it.

        Args:
            current: The active profile, or None if unknown (save is skipped).
            target: The profile to switch to.
            working_root: The shared directory holding derived artifacts.
            assets: Source assets whose artifacts should be cached.
            activate: Host hook performing the actual profile switch.
            progress: Optional progress reporter.
            fallback_uncached: If True, a failed save still activates the
                target, without restoring from cache.

        Returns:
            SwitchReport with the reports of both phases.

        Raises:
            ProfileAlreadyActiveError: If target is already active.
            MissingWorkingRootError: If saving fails and no fallback is allowed.
            SyncIOError: If saving fails and no fallback is allowed, or if
                restoring fails.
        """
        validate_profile(target)
        if current == target:
            raise ProfileAlreadyActiveError(target)

        save_report: SaveReport | None = None
        if current is None:
            logger.warning(
                "No active profile recorded; not caching before switching to '%s'",
                target,
            )
        else:
            try:
                save_report = self.save_current_profile(
                    current, working_root, assets, progress
                )
            except (MissingWorkingRootError, SyncIOError) as e:
                if not fallback_uncached:
                    raise
                logger.warning(
                    "Couldn't cache profile '%s' (%s); switching without cache",
                    current,
                    e,
                )
                activate(target)
                return SwitchReport(previous=current, target=target, cached=False)

        restore_report = self.restore_profile(target, working_root, progress)
        activate(target)
        return SwitchReport(
            previous=current,
            target=target,
            save=save_report,
            restore=restore_report,
        )
