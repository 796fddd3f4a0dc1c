#!/usr/bin/env python3
"""
Client for the Wikia public REST API (v1).

Every method maps onto a single endpoint: optional arguments become query
parameters only when supplied, one GET request is made, and the JSON body
is unwrapped where the endpoint wraps its payload.

Usage:
    from wikia.client import Wikia

    cross_wiki = Wikia()
    wikis = cross_wiki.search_wikis("star wars", limit=5)

    starwars = Wikia(wiki="starwars")
    titles = starwars.search_suggestions("Luke")
"""

import logging
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version as package_version
from typing import Any, Optional, Sequence, Union

import requests

from wikia.logging_config import client_logger_name
from wikia.query import encode_params, join_list

try:
    __version__ = package_version("wikia-api")
except PackageNotFoundError:
    # Running from a source checkout
    __version__ = "0.0.0"

ListOrStr = Union[str, Sequence[Union[str, int]]]

BASE_URL_TEMPLATE = "http://www.{prefix}wikia.com/api/v1"
DEFAULT_USER_AGENT = f"Wikia-Python/{__version__}"


class WikiRequiredError(RuntimeError):
    """Raised when a wiki-only method is called on a cross-wiki client."""


class Wikia:
    """Read-only client for the Wikia API, scoped to one wiki or cross-wiki."""

    version = __version__

    def __init__(
        self,
        wiki: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the client.

        Args:
            wiki: Wiki subdomain to use (e.g. "starwars"); leave empty for cross-wiki
            user_agent: Custom user agent string
            timeout: Request timeout in seconds, handed to requests as-is
            logger: Logger instance (defaults to "wikia.<wiki>" or "wikia.cross-wiki")
        """
        self.wiki = wiki or None
        self.base_url = BASE_URL_TEMPLATE.format(prefix=f"{wiki}." if wiki else "")
        self.timeout = timeout

        self.logger = logger or logging.getLogger(client_logger_name(self.wiki))

        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent or DEFAULT_USER_AGENT,
            "Accept": "application/json",
            "Accept-Encoding": "gzip",
            "Content-Type": "application/json",
        })

    def __repr__(self) -> str:
        return f"Wikia(wiki={self.wiki!r})"

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        """Close the underlying HTTP session and its pooled connections."""
        self.session.close()

    def _require_wiki(self, message: str):
        if not self.wiki:
            raise WikiRequiredError(message)

    def request(self, path: str, params: Optional[dict] = None, description: str = "API request") -> Any:
        """
        Make a single GET request against the API.

        Args:
            path: Endpoint path relative to the base URL (e.g. "/Articles/Details")
            params: Query parameters; values are encoded for the wire
            description: Human-readable description for logging

        Returns:
            Decoded JSON body

        Raises:
            requests.RequestException: on network errors or non-2xx statuses
            ValueError: on an undecodable body (requests.JSONDecodeError on
                current versions of requests)
        """
        query = encode_params(params)
        self.logger.debug(f"GET {path} {query}")

        try:
            response = self.session.get(
                self.base_url + path,
                params=query,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            # ValueError covers undecodable bodies on requests < 2.27
            self.logger.error(f"Request failed for {description}: {e}")
            raise

    # -- Wikis ---------------------------------------------------------------

    def search_wikis(
        self,
        string: str,
        *,
        expand: bool = False,
        hub: Optional[str] = None,
        lang: Optional[ListOrStr] = None,
        include_domain: bool = True,
        limit: Optional[int] = None,
        batch: Optional[int] = None,
    ) -> Any:
        """
        Search for wikis by name.

        Args:
            string: Term to search for
            expand: Request extended wiki info
            hub: Vertical to filter with (e.g. Gaming, Entertainment, Lifestyle)
            lang: Language codes to filter with, list or comma-separated
            include_domain: Include the wiki domain in the results
            limit: Maximum number of results
            batch: Batch (page) index to retrieve

        Returns:
            Raw response body
        """
        params = {"string": string, "includeDomain": include_domain}
        lang = join_list(lang)
        if hub:
            params["hub"] = hub
        if lang:
            params["lang"] = lang
        if limit:
            params["limit"] = limit
        if expand:
            params["expand"] = 1
        if batch:
            params["batch"] = batch
        return self.request("/Wikis/ByString", params, f"searching wikis for {string!r}")

    def get_details(
        self,
        ids: ListOrStr,
        *,
        width: Optional[int] = None,
        height: Optional[int] = None,
        snippet: Optional[int] = None,
    ) -> Any:
        """
        Get details of one or more wikis.

        Args:
            ids: Wiki ids, list or comma-separated
            width: Thumbnail width in pixels
            height: Thumbnail height in pixels
            snippet: Maximum number of words returned in description

        Returns:
            Mapping of wiki id to details
        """
        params = {"ids": join_list(ids)}
        if width:
            params["width"] = width
        if height:
            params["height"] = height
        if snippet:
            params["snippet"] = snippet
        return self.request("/Wikis/Details", params, "fetching wiki details")["items"]

    def get_top_wikis(
        self,
        *,
        expand: bool = False,
        limit: Optional[int] = None,
        hub: Optional[str] = None,
        lang: Optional[ListOrStr] = None,
        batch: Optional[int] = None,
    ) -> list:
        """Get the list of top wikis, optionally filtered by hub and language."""
        params = {}
        lang = join_list(lang)
        if limit:
            params["limit"] = limit
        if hub:
            params["hub"] = hub
        if lang:
            params["lang"] = lang
        if batch:
            params["batch"] = batch
        if expand:
            params["expand"] = 1
        return self.request("/Wikis/List", params, "fetching top wikis")["items"]

    # -- Search --------------------------------------------------------------

    def search_suggestions(self, query: str) -> list[str]:
        """
        Get search suggestions for a query. Requires a wiki.

        Returns:
            Suggested article titles (empty if there are none); items
            without a title are skipped
        """
        self._require_wiki("Search suggestions can only be used for a wiki not cross-wiki.")
        data = self.request(
            "/SearchSuggestions/List",
            {"query": query},
            f"fetching search suggestions for {query!r}",
        )
        return [item["title"] for item in data.get("items") or [] if item.get("title")]

    def search_combined(
        self,
        query: str,
        *,
        langs: Optional[ListOrStr] = None,
        hubs: Optional[ListOrStr] = None,
        namespaces: Optional[ListOrStr] = None,
        limit: Optional[int] = None,
        min_article_quality: Optional[int] = None,
    ) -> Any:
        """
        Combined (wiki and cross-wiki) search.

        Args:
            query: Search query
            langs: Language codes (e.g. en,de,fr), list or comma-separated
            hubs: Verticals (e.g. Gaming, Lifestyle), list or comma-separated
            namespaces: Namespace ids, list or comma-separated
            limit: Maximum number of articles returned
            min_article_quality: Minimal article quality, 0 to 99
        """
        params = {"query": query}
        langs = join_list(langs)
        hubs = join_list(hubs)
        namespaces = join_list(namespaces)
        if langs:
            params["langs"] = langs
        if hubs:
            params["hubs"] = hubs
        if namespaces:
            params["namespaces"] = namespaces
        if limit:
            params["limit"] = limit
        if min_article_quality is not None:
            params["minArticleQuality"] = min_article_quality
        return self.request("/Search/Combined", params, f"combined search for {query!r}")

    def search_cross_wiki(
        self,
        query: str,
        *,
        expand: Optional[bool] = None,
        hub: Optional[ListOrStr] = None,
        lang: Optional[ListOrStr] = None,
        rank: Optional[str] = None,
        limit: Optional[int] = None,
        batch: Optional[int] = None,
        height: Optional[int] = None,
        width: Optional[int] = None,
        snippet: Optional[int] = None,
    ) -> Any:
        """
        Cross-wiki search.

        Args:
            query: Search query
            expand: Request extended details; defaults to True when the
                client is scoped to a wiki, False otherwise
            hub: Verticals, list or comma-separated
            lang: Language codes, list or comma-separated
            rank: Ranking to use (default, newest, oldest, recently-modified,
                stable, most-viewed, freshest, stalest)
            limit: Maximum number of results
            batch: Batch (page) of results to fetch
            height: Thumbnail height, only sent when expanding
            width: Thumbnail width, only sent when expanding
            snippet: Maximum words in description, only sent when expanding
        """
        if expand is None:
            expand = self.wiki is not None

        params = {"query": query}
        hub = join_list(hub)
        lang = join_list(lang)
        if hub:
            params["hub"] = hub
        if lang:
            params["lang"] = lang
        if rank:
            params["rank"] = rank
        if limit:
            params["limit"] = limit
        if batch:
            params["batch"] = batch
        if expand:
            params["expand"] = 1
            if width:
                params["width"] = width
            if height:
                params["height"] = height
            if snippet:
                params["snippet"] = snippet
        return self.request("/Search/CrossWiki", params, f"cross-wiki search for {query!r}")

    def search(
        self,
        query: str,
        *,
        type: Optional[str] = None,
        rank: Optional[str] = None,
        limit: Optional[int] = None,
        min_article_quality: Optional[int] = None,
        batch: Optional[int] = None,
        namespaces: Optional[ListOrStr] = None,
    ) -> Any:
        """
        Search the current wiki. Requires a wiki.

        Args:
            query: Search query
            type: "articles" (default) or "videos"; videos also need namespaces=6
            rank: Ranking to use for the results
            limit: Maximum number of results
            min_article_quality: Minimal article quality, 0 to 99
            batch: Batch (page) of results to fetch
            namespaces: Namespace ids, list or comma-separated
        """
        self._require_wiki("search() is only available if a wiki is provided.")
        params = {"query": query}
        namespaces = join_list(namespaces)
        if type:
            params["type"] = type
        if rank:
            params["rank"] = rank
        if limit:
            params["limit"] = limit
        if min_article_quality is not None:
            params["minArticleQuality"] = min_article_quality
        if batch:
            params["batch"] = batch
        if namespaces:
            params["namespaces"] = namespaces
        return self.request("/Search/List", params, f"searching {self.wiki} for {query!r}")

    # -- WAM -----------------------------------------------------------------

    def get_min_max_wam_index_date(self) -> dict:
        """
        Get the first and last dates WAM scores are available for.

        The API reports unix seconds under min_max_dates.min_date and
        min_max_dates.max_date; the dates are returned under snake_case
        keys, not camelCase minDate/maxDate.

        Returns:
            Dict with timezone-aware UTC datetimes under "min_date" and "max_date"
        """
        data = self.request("/WAM/MinMaxWamIndexDate", description="fetching WAM date range")
        dates = data["min_max_dates"]
        return {
            "min_date": datetime.fromtimestamp(dates["min_date"], tz=timezone.utc),
            "max_date": datetime.fromtimestamp(dates["max_date"], tz=timezone.utc),
        }

    def get_wam_languages(self, wam_day: Optional[int] = None) -> list[str]:
        """
        Get language codes of the wikis in the WAM ranking for a given day.

        Args:
            wam_day: Unix timestamp (seconds) of the day to list languages for
        """
        params = {}
        if wam_day:
            params["wam_day"] = wam_day
        data = self.request("/WAM/WAMLanguages", params, "fetching WAM languages")
        return data.get("languages") or []

    def get_wam_index(
        self,
        *,
        wam_day: Optional[int] = None,
        wam_previous_day: Optional[int] = None,
        vertical_id: Optional[int] = None,
        wiki_lang: Optional[str] = None,
        wiki_id: Optional[int] = None,
        wiki_word: Optional[str] = None,
        exclude_blacklist: Optional[bool] = None,
        sort_column: Optional[str] = None,
        sort_direction: Optional[str] = None,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
        fetch_admins: Optional[bool] = None,
        avatar_size: Optional[int] = None,
        fetch_wiki_images: Optional[bool] = None,
        wiki_image_width: Optional[int] = None,
        wiki_image_height: Optional[int] = None,
    ) -> Any:
        """
        Get the WAM index (wikis with their WAM ranks).

        Args:
            wam_day: Day for which WAM scores are displayed
            wam_previous_day: Day the WAM score difference is calculated from
            vertical_id: Vertical to pull the wiki list for
            wiki_lang: Language code to narrow results to
            wiki_id: Id of a specific wiki
            wiki_word: Fragment of url to search for amongst wikis
            exclude_blacklist: Exclude wikis with Content Warning enabled
            sort_column: Column to sort by
            sort_direction: Sort direction
            offset: Offset from the beginning of data
            limit: Maximum number of wikis
            fetch_admins: Return admins of each wiki
            avatar_size: Admin avatar size in pixels
            fetch_wiki_images: Return the image of each wiki
            wiki_image_width: Wiki image width in pixels
            wiki_image_height: Wiki image height in pixels (-1 keeps aspect ratio)
        """
        params = {}
        if wam_day:
            params["wam_day"] = wam_day
        if wam_previous_day:
            params["wam_previous_day"] = wam_previous_day
        # Wire name is misspelt by the remote API
        if vertical_id:
            params["veritical_id"] = vertical_id
        if wiki_lang:
            params["wiki_lang"] = wiki_lang
        if wiki_id:
            params["wiki_id"] = wiki_id
        if wiki_word:
            params["wiki_word"] = wiki_word
        if exclude_blacklist:
            params["exclude_blacklist"] = exclude_blacklist
        if sort_column:
            params["sort_column"] = sort_column
        if sort_direction:
            params["sort_direction"] = sort_direction
        if offset:
            params["offset"] = offset
        if limit:
            params["limit"] = limit
        if fetch_admins is not None:
            params["fetch_admins"] = fetch_admins
        if avatar_size:
            params["avatar_size"] = avatar_size
        if fetch_wiki_images is not None:
            params["fetch_wiki_images"] = fetch_wiki_images
        if wiki_image_width:
            params["wiki_image_width"] = wiki_image_width
        if wiki_image_height:
            params["wiki_image_height"] = wiki_image_height
        return self.request("/WAM/WAMIndex", params, "fetching WAM index")

    # -- Users, navigation, wiki data -----------------------------------------

    def get_users(self, ids: ListOrStr, *, size: Optional[int] = None) -> Any:
        """
        Get details about users.

        Args:
            ids: User ids, list or comma-separated (at most 100)
            size: Square thumbnail size; 0 for no thumbnail (API default 100)
        """
        params = {"ids": join_list(ids)}
        if size is not None:
            params["size"] = size
        return self.request("/User/Details", params, "fetching user details")

    def get_related_articles(self, ids: ListOrStr, *, limit: Optional[int] = None) -> Any:
        """Get pages related to the given article ids."""
        params = {"ids": join_list(ids)}
        if limit:
            params["limit"] = limit
        return self.request("/RelatedPages/List", params, "fetching related articles")

    def get_navigation(self) -> Any:
        """Get the wiki navigation links (main menu)."""
        return self.request("/Navigation/Data", description="fetching navigation")["navigation"]

    def get_wiki_data(self) -> Any:
        return self.request("/Mercury/WikiVariables", description="fetching wiki variables")

    # -- Activity ------------------------------------------------------------

    def _activity(
        self,
        path: str,
        description: str,
        limit: Optional[int],
        namespaces: Optional[ListOrStr],
        allow_duplicates: Optional[bool],
    ) -> list:
        params = {}
        namespaces = join_list(namespaces)
        if limit:
            params["limit"] = limit
        if namespaces:
            params["namespaces"] = namespaces
        if allow_duplicates is not None:
            params["allowDuplicates"] = allow_duplicates
        return self.request(path, params, description)["items"]

    def get_latest_activity(
        self,
        *,
        limit: Optional[int] = None,
        namespaces: Optional[ListOrStr] = None,
        allow_duplicates: Optional[bool] = None,
    ) -> list:
        """
        Get latest activity information.

        Args:
            limit: Maximum number of results
            namespaces: Namespace ids, list or comma-separated
            allow_duplicates: Whether revisions of an article by the same
                user may be listed more than once (API default True)
        """
        return self._activity(
            "/Activity/LatestActivity", "fetching latest activity",
            limit, namespaces, allow_duplicates,
        )

    def get_recently_changed_articles(
        self,
        *,
        limit: Optional[int] = None,
        namespaces: Optional[ListOrStr] = None,
        allow_duplicates: Optional[bool] = None,
    ) -> list:
        """Get recently changed articles. Takes the same options as get_latest_activity."""
        return self._activity(
            "/Activity/RecentlyChangedArticles", "fetching recently changed articles",
            limit, namespaces, allow_duplicates,
        )

    # -- Articles ------------------------------------------------------------

    def get_simplified_article(self, id: Union[int, str]) -> list:
        """
        Get an article as simplified JSON.

        Returns:
            The article's sections
        """
        data = self.request("/Articles/AsSimpleJson", {"id": id}, f"fetching article {id}")
        return data["sections"]

    def get_article_details(
        self,
        ids: ListOrStr,
        *,
        titles: Optional[ListOrStr] = None,
        abstract: Optional[int] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> Any:
        """
        Get details about one or more articles.

        Args:
            ids: Article ids, list or comma-separated
            titles: Titles with underscores instead of spaces, list or comma-separated
            abstract: Desired length of the article's abstract
            width: Desired thumbnail width
            height: Desired thumbnail height
        """
        params = {"ids": join_list(ids)}
        titles = join_list(titles)
        if titles:
            params["titles"] = titles
        if abstract:
            params["abstract"] = abstract
        if width:
            params["width"] = width
        if height:
            params["height"] = height
        return self.request("/Articles/Details", params, "fetching article details")

    def get_articles_list(
        self,
        *,
        category: Optional[str] = None,
        namespaces: Optional[ListOrStr] = None,
        limit: Optional[int] = None,
        offset: Optional[str] = None,
        expand: bool = False,
    ) -> Any:
        """
        Get articles in alphabetical order.

        Args:
            category: Only return articles in this category
            namespaces: Namespace ids, list or comma-separated
            limit: Maximum number of results
            offset: Lexicographically minimal article title
            expand: Request expanded data
        """
        params = {}
        namespaces = join_list(namespaces)
        if category:
            params["category"] = category
        if namespaces:
            params["namespaces"] = namespaces
        if limit:
            params["limit"] = limit
        if offset:
            params["offset"] = offset
        if expand:
            params["expand"] = 1
        return self.request("/Articles/List", params, "fetching articles list")

    def get_most_linked_articles(self, *, expand: bool = False) -> Any:
        """Get the most linked articles on this wiki."""
        params = {}
        if expand:
            params["expand"] = 1
        return self.request("/Articles/MostLinked", params, "fetching most linked articles")

    def get_new_articles(
        self,
        *,
        namespaces: Optional[ListOrStr] = None,
        limit: Optional[int] = None,
        min_article_quality: Optional[int] = None,
    ) -> Any:
        """
        Get new articles on this wiki. Requires a wiki.

        Args:
            namespaces: Namespace ids, list or comma-separated
            limit: Maximum number of results (at most 100)
            min_article_quality: Minimal article quality, 0 to 99
        """
        self._require_wiki("A wiki must be set to use this method.")
        params = {}
        namespaces = join_list(namespaces)
        if namespaces:
            params["namespaces"] = namespaces
        if limit:
            params["limit"] = limit
        if min_article_quality is not None:
            params["minArticleQuality"] = min_article_quality
        return self.request("/Articles/New", params, "fetching new articles")

    def get_popular_articles(
        self,
        *,
        limit: Optional[int] = None,
        base_article_id: Optional[int] = None,
        expand: bool = False,
    ) -> Any:
        """
        Get the most popular articles of all time.

        Args:
            limit: Maximum number of results (at most 10)
            base_article_id: Only articles related to this article id
            expand: Request expanded data
        """
        params = {}
        if limit:
            params["limit"] = limit
        if base_article_id:
            params["baseArticleId"] = base_article_id
        if expand:
            params["expand"] = 1
        return self.request("/Articles/Popular", params, "fetching popular articles")

    def get_top_articles(
        self,
        *,
        namespaces: Optional[ListOrStr] = None,
        limit: Optional[int] = None,
        base_article_id: Optional[int] = None,
        expand: bool = False,
    ) -> Any:
        """Get the most viewed articles on this wiki (limit is capped at 250)."""
        params = {}
        namespaces = join_list(namespaces)
        if namespaces:
            params["namespaces"] = namespaces
        if limit:
            params["limit"] = limit
        if base_article_id:
            params["baseArticleId"] = base_article_id
        if expand:
            params["expand"] = 1
        return self.request("/Articles/Top", params, "fetching top articles")

    def get_top_articles_by_hub(
        self,
        hub: str,
        *,
        lang: Optional[ListOrStr] = None,
        namespaces: Optional[ListOrStr] = None,
    ) -> list:
        """
        Get the top articles by pageviews for a hub.

        Args:
            hub: Vertical name (e.g. Gaming)
            lang: Language codes, list or comma-separated
            namespaces: Namespace ids, list or comma-separated
        """
        params = {"hub": hub}
        lang = join_list(lang)
        namespaces = join_list(namespaces)
        if lang:
            params["lang"] = lang
        if namespaces:
            params["namespaces"] = namespaces
        return self.request("/Articles/TopByHub", params, f"fetching top articles for {hub}")["items"]
