"""Changelog orchestration: commit history, pull request matching and rendering."""

import structlog

from .commits import CommitHistorySource
from .exceptions import NoCommitsFound, NoPullRequestsMatched, RefResolutionError
from .matcher import PullRequestMatcher, strategy_for
from .models import CommitInfo, PullRequestInfo, ReleaseNotesOptions
from .pull_requests import PullRequestSource
from .synthesizer import synthesize_pull_requests
from .transform import ChangelogContext, build_changelog
from .window import resolve_release_window

logger = structlog.get_logger(__name__)


class ReleaseNotes:
    """Builds the changelog of a single release.

    The commit history between the two tags is loaded first. In commit mode
    every commit becomes an entry. Otherwise the merged pull requests of the
    release window are fetched and matched against the history. The result is
    rendered by :func:`build_changelog`.
    """

    def __init__(self, commit_source: CommitHistorySource, pull_request_source: PullRequestSource, options: ReleaseNotesOptions) -> None:
        """Initialize with the data sources and the options of this run.

        Args:
            commit_source: Provides the commits between two references.
            pull_request_source: Provides merged pull requests and filters release commits.
            options: Repository, tags, flags and configuration of the run.
        """
        self.commit_source = commit_source
        self.pull_request_source = pull_request_source
        self.options = options

    async def pull(self) -> str | None:
        """Build the changelog.

        Returns:
            The rendered changelog, or ``None`` when the release has no entries.

        Raises:
            RefResolutionError: If the tags cannot be compared and ``fail_on_error`` is set.
        """
        try:
            if self.options.commit_mode:
                logger.info("Executing experimental commit mode")
                pull_requests = await self.generate_commit_pull_requests()
            else:
                pull_requests = await self.get_merged_pull_requests()
        except (NoCommitsFound, NoPullRequestsMatched) as exc:
            logger.warning(str(exc), owner=self.options.owner, repo=self.options.repo)
            return None

        context = ChangelogContext(
            owner=self.options.owner,
            repo=self.options.repo,
            from_tag=self.options.from_tag,
            to_tag=self.options.to_tag,
        )
        return build_changelog(pull_requests, self.options.configuration, context)

    async def get_commit_history(self) -> list[CommitInfo]:
        """Load the release commits, oldest first.

        Raises:
            NoCommitsFound: If the range is empty or could not be compared.
            RefResolutionError: If the comparison failed and ``fail_on_error`` is set.
        """
        options = self.options
        try:
            commits = await self.commit_source.diff(options.owner, options.repo, options.from_tag, options.to_tag)
        except RefResolutionError as exc:
            if options.fail_on_error:
                raise
            logger.error("Failed to retrieve commits - Invalid tag?", error=str(exc))
            commits = []

        if not commits:
            raise NoCommitsFound(f"No commits found between - {options.from_tag}...{options.to_tag}")
        return commits

    async def get_merged_pull_requests(self) -> list[PullRequestInfo]:
        """Fetch the pull requests merged in the release window and keep those belonging to the release.

        Raises:
            NoCommitsFound: If the release has no commits.
            NoPullRequestsMatched: If every commit is excluded or no pull request corresponds to a release commit.
        """
        options = self.options
        configuration = options.configuration

        commits = await self.get_commit_history()
        window = resolve_release_window(commits, configuration.max_back_track_time_days)

        release_commits = self.pull_request_source.filter_commits(commits, configuration.exclude_merge_branches)
        logger.info(f"Retrieved {len(release_commits)} release commits for {options.owner}/{options.repo}")
        if not release_commits:
            raise NoPullRequestsMatched("All release commits come from excluded merge branches")

        candidates = await self.pull_request_source.get_between_dates(
            options.owner,
            options.repo,
            window.from_date,
            window.to_date,
            configuration.max_pull_requests,
            include_merge_commit=configuration.use_metadata_hash,
        )

        matched = PullRequestMatcher(strategy_for(configuration)).match(release_commits, candidates)
        if not matched:
            raise NoPullRequestsMatched("No pull requests found")
        return matched

    async def generate_commit_pull_requests(self) -> list[PullRequestInfo]:
        """Turn every release commit into a changelog entry.

        Raises:
            NoCommitsFound: If the release has no commits.
        """
        pull_requests = synthesize_pull_requests(await self.get_commit_history())
        logger.info("Synthesized entries from commits", entries=sum(1 for pull_request in pull_requests if pull_request.is_synthesized))
        return pull_requests
