"""
External job source client.

Issues one GET /jobs per (title, country) pair and decodes the response:

    {"USA": [["Cloud Engineer", 65000, "<skills><skill>AWS</skill></skills>"], ...], ...}

Any failure aborts the whole fetch; no partial results are returned.
"""

import json
import math
from typing import Any

import defusedxml.ElementTree as ET
import httpx
from defusedxml import DefusedXmlException

from search.errors import DecodeError, NotFoundError, TransportError
from search.types import ExternalJob, SearchCriteria
from utils.search_logging import SearchLogContext

DEFAULT_COUNTRY = "Argentina"
JOBS_PATH = "/jobs"


def build_query_params(name: str, salary_min: int, salary_max: int, country: str) -> dict[str, str]:
    """Query parameters for GET /jobs; zero salaries and empty country are omitted."""
    params = {"name": name}
    if salary_min > 0:
        params["salary_min"] = str(salary_min)
    if salary_max > 0:
        params["salary_max"] = str(salary_max)
    if country:
        params["country"] = country
    return params


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def parse_body(content: bytes) -> Any:
    """
    Decode a strict JSON response body.

    NaN, Infinity and -Infinity are not JSON and are rejected.

    Raises:
        DecodeError: body is not valid JSON
    """
    try:
        return json.loads(content, parse_constant=_reject_constant)
    except ValueError as e:
        raise DecodeError(f"could not decode response: {e}") from e


def parse_skills(markup: str) -> list[str]:
    """
    Decode <skills><skill>Name</skill>...</skills> into skill names.

    Entity and DTD declarations are refused.

    Raises:
        DecodeError: markup is not well-formed, declares entities, or the root is not <skills>
    """
    try:
        root = ET.fromstring(markup)
    except (ET.ParseError, DefusedXmlException) as e:
        raise DecodeError(f"could not unmarshal skills XML: {e}") from e

    if root.tag != "skills":
        raise DecodeError(f"could not unmarshal skills XML: unexpected root element <{root.tag}>")

    return ["".join(skill.itertext()) for skill in root.findall("skill")]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def decode_jobs(payload: Any, country: str) -> list[ExternalJob]:
    """
    Decode the records listed under one country key.

    Records that are not [title:str, salary:number, skills:str] are skipped.

    Raises:
        DecodeError: payload is not an object, the country entry is not a list,
            a salary is not finite, or a skills payload is malformed
        NotFoundError: the country key is absent
    """
    if not isinstance(payload, dict):
        raise DecodeError("could not decode response: expected a JSON object")

    if country not in payload:
        raise NotFoundError(f"no jobs found for country: {country}")

    records = payload[country]
    if not isinstance(records, list):
        raise DecodeError(f"could not decode response: jobs for {country} are not a list")

    jobs = []
    for record in records:
        if not isinstance(record, list) or len(record) != 3:
            continue

        title, salary, skills_xml = record
        if not isinstance(title, str) or not _is_number(salary) or not isinstance(skills_xml, str):
            continue

        if isinstance(salary, float) and not math.isfinite(salary):
            raise DecodeError(f"could not decode response: salary {salary} for {title!r} is not finite")

        jobs.append(ExternalJob(title=title, salary=int(salary), skills=parse_skills(skills_xml)))

    return jobs


class ExternalJobFetcher:
    """
    Fetches external jobs for every title x country pair of resolved criteria.

    The httpx client is owned by the caller and should carry base_url and timeout.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        log: SearchLogContext,
        default_country: str = DEFAULT_COUNTRY,
    ):
        self.client = client
        self.default_country = default_country
        self.log = log

    async def fetch(
        self,
        name: str,
        salary_min: int,
        salary_max: int,
        country: str,
    ) -> list[ExternalJob]:
        """
        Fetch and decode jobs for one title/country pair.

        Raises:
            TransportError: request failed or non-200 status
            DecodeError: body is not valid JSON or skills markup is malformed
            NotFoundError: response lacks the requested country key
        """
        params = build_query_params(name, salary_min, salary_max, country)
        self.log.log_info(f"Fetching external jobs: {params}")

        try:
            response = await self.client.get(JOBS_PATH, params=params)
        except httpx.RequestError as e:
            raise TransportError(f"error fetching jobs from API ({name}/{country}): {e}") from e

        if response.status_code != httpx.codes.OK:
            raise TransportError(f"unexpected status code: {response.status_code}")

        return decode_jobs(parse_body(response.content), country)

    async def fetch_all(self, criteria: SearchCriteria) -> list[ExternalJob]:
        """
        Fetch jobs for titles (outer) x countries (inner), in that order.

        Args:
            criteria: Resolved criteria

        Returns:
            Jobs from all pairs, concatenated in request order
        """
        countries: list[str] = list(criteria.preferred_countries or []) or [self.default_country]
        titles: list[str] = list(criteria.job_titles or [])

        all_jobs: list[ExternalJob] = []
        for title in titles:
            for country in countries:
                try:
                    jobs = await self.fetch(title, criteria.salary_min, 0, country)
                except Exception as e:
                    self.log.log_error(f"Fetch failed for {title}/{country}: {e}")
                    raise
                all_jobs.extend(jobs)

        self.log.log_info(f"Fetched {len(all_jobs)} external jobs")
        return all_jobs
