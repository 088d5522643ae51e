"""Update lifecycle: context initialisation and the decision state machine.

:func:`build_context` gathers everything the decision needs into an immutable
:class:`UpdateContext` (installable packages, the resolved package name, the
latest release, the loaded state). :class:`UpdateController` then picks one
branch:

- ``interrupted`` in the saved state: offer to resume (re-run the install,
  backing up first only when an earlier install exists and no backup does)
- not ``initialized``: offer the first download
- installed version equals the latest: report up to date
- otherwise: show the changelog and offer the update (with backup)

State is saved after a successful install, and with ``interrupted=True``
when a download fails or the user interrupts the run. Declined prompts and
the up-to-date branch leave the state file untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence, Tuple

from .changelog import parse
from .downloader import Downloader
from .errors import DownloadError, ResolutionError, UnrecognizedPackage, UserCancelled
from .logging_utils import log_event
from .messages import Messages, fill_placeholders
from .prompts import prompt_yes_no, select_package
from .render import render_changelog
from .resolver import ReleaseInfo, VersionResolver
from .state import UpdaterState, save_state
from .ui import info, ok, warn

Confirm = Callable[[str, bool], bool]
Choose = Callable[[Sequence[str], str], str]


class Outcome(Enum):
    INSTALLED = "installed"
    RESUMED = "resumed"
    UPDATED = "updated"
    UP_TO_DATE = "up_to_date"
    DECLINED = "declined"


@dataclass(frozen=True)
class UpdateContext:
    """Everything the state machine decides on, fixed before it starts."""

    package_name: str
    installed_version: str
    packages: Tuple[str, ...]
    release: ReleaseInfo
    state: UpdaterState
    state_path: Path

    @property
    def latest_version(self) -> str:
        return self.release.version


def resolve_package(
    requested: str,
    packages: Sequence[str],
    messages: Mapping[str, str],
    choose: Optional[Choose] = None,
) -> str:
    """Return ``requested`` when installable, otherwise ask the user to pick."""
    if not packages:
        raise ResolutionError(messages["noPackages"])
    if requested in packages:
        return requested
    choose = choose or select_package
    if requested:
        # recovered locally: the user picks a valid name instead
        warn(fill_placeholders(messages[UnrecognizedPackage.message_key], package_name=requested))
        log_event("package_unrecognized", package=requested)
    return choose(packages, messages["selectPackage"])


def build_context(
    requested_package: str,
    requested_version: str,
    resolver: VersionResolver,
    state_path: Path,
    messages: Mapping[str, str],
    strict_state: bool = False,
    choose: Optional[Choose] = None,
) -> UpdateContext:
    """Resolve the package and its latest release and load the saved state.

    The installed version is ``requested_version`` when given, otherwise the
    version recorded in the state file.
    """
    packages = tuple(resolver.list_installable_packages())
    package_name = resolve_package(requested_package, packages, messages, choose)
    release = resolver.resolve_latest(package_name)
    state = UpdaterState.load(state_path, strict=strict_state)
    ctx = UpdateContext(
        package_name=package_name,
        installed_version=requested_version or state.version,
        packages=packages,
        release=release,
        state=state,
        state_path=state_path,
    )
    log_event(
        "update_context_ready",
        package=package_name,
        version=ctx.installed_version,
        latest=release.version,
        path=str(state_path),
    )
    return ctx


class UpdateController:
    """Runs one pass of the update state machine for a prepared context."""

    def __init__(
        self,
        context: UpdateContext,
        downloader: Downloader,
        messages: Messages,
        confirm: Optional[Confirm] = None,
        assume_yes: bool = False,
    ) -> None:
        self.context = context
        self.downloader = downloader
        self.messages = messages
        self.confirm = confirm or prompt_yes_no
        self.assume_yes = assume_yes

    def _msg(self, key: str, version: Optional[str] = None) -> str:
        ctx = self.context
        return self.messages.fill(
            key,
            package_name=ctx.package_name,
            version=version if version is not None else ctx.installed_version,
            url=ctx.release.source_url,
        )

    def _ask(self, question: str, default: bool) -> bool:
        if self.assume_yes:
            info(f"{question} [yes]")
            return True
        return self.confirm(question, default)

    def run(self) -> Outcome:
        """Execute the branch selected by the saved state and latest release.

        Raises :class:`UserCancelled` after recording the interruption when
        the run is interrupted, and propagates :class:`DownloadError` and
        :class:`BackupError` from the downloader.
        """
        try:
            outcome = self._decide()
        except (KeyboardInterrupt, UserCancelled) as e:
            self.record_interruption()
            log_event("update_cancelled", package=self.context.package_name)
            if isinstance(e, UserCancelled):
                raise
            raise UserCancelled() from e
        log_event("update_branch", package=self.context.package_name, branch=outcome.value)
        return outcome

    def _decide(self) -> Outcome:
        ctx = self.context
        latest = ctx.latest_version
        if ctx.state.interrupted:
            warn(self._msg("resumeDownload"))
            if self._ask(self.messages["resumePrompt"], True):
                # an existing backup predates the interrupted copy and must survive
                self._install(
                    has_existing_install=ctx.state.initialized
                    and not self.downloader.has_backup()
                )
                ok(self._msg("resumeSuccess", latest))
                return Outcome.RESUMED

        if not ctx.state.initialized:
            question = "\n".join(
                [self._msg("welcome"), self._msg("noFiles"), self._msg("downloadPrompt")]
            )
            if self._ask(question, True):
                self._install(has_existing_install=False)
                ok(self._msg("downloadSuccess", latest))
                return Outcome.INSTALLED
            info(self._msg("firstTimeCancel"))
            return Outcome.DECLINED

        if ctx.installed_version == latest:
            ok(self._msg("updated", latest))
            return Outcome.UP_TO_DATE

        info(self._msg("newVersionAvailable", latest))
        print(self._msg("changelogHeader", latest))
        print(render_changelog(parse(ctx.release.changelog_text), self.messages))
        if self._ask(self.messages["updatePrompt"], False):
            self._install(has_existing_install=True)
            ok(self._msg("updateSuccess", latest))
            return Outcome.UPDATED
        info(self._msg("updateCancel"))
        return Outcome.DECLINED

    def _install(self, has_existing_install: bool) -> None:
        ctx = self.context
        try:
            self.downloader.install(ctx.release.source_url, has_existing_install)
        except DownloadError as e:
            self.record_interruption()
            log_event("install_failed", package=ctx.package_name, url=ctx.release.source_url, error=e.detail)
            raise
        save_state(ctx.state_path, ctx.package_name, ctx.latest_version, True, False)
        log_event("state_saved", package=ctx.package_name, version=ctx.latest_version)

    def record_interruption(self) -> UpdaterState:
        """Persist ``interrupted=True`` keeping the previous version."""
        ctx = self.context
        return save_state(
            ctx.state_path,
            ctx.package_name,
            ctx.installed_version,
            ctx.state.initialized,
            True,
        )


__all__ = [
    "Outcome",
    "UpdateContext",
    "UpdateController",
    "build_context",
    "resolve_package",
]
