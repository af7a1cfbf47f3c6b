import argparse
import asyncio
import time

from movies_service.config.settings import configure_logging, get_settings
from movies_service.core.exceptions import FetchError
from movies_service.services.movies_service import MoviesService, http_status_for
from movies_service.transport.movies_info_client import MoviesInfoRestClient


async def main(movie_ids):
    settings = get_settings()
    print("--- Smoke Test: movies-info-service ---")
    print(f"URL: {settings.MOVIES_INFO_URL}")
    print(f"Policy: {settings.RETRY_MAX_ATTEMPTS} attempts, {settings.RETRY_DELAY}s delay")

    client = MoviesInfoRestClient.from_settings(settings)

    # 1. Прямой вызов клиента
    for movie_id in movie_ids:
        t_start = time.time()
        result = await client.fetch(movie_id)
        elapsed = time.time() - t_start

        if isinstance(result, FetchError):
            print(f"[{movie_id}] {result.kind.value.upper()} -> HTTP {http_status_for(result)} ({elapsed:.2f}s): {result}")
        else:
            print(f"[{movie_id}] OK ({elapsed:.2f}s): {result.movie.to_wire()}")

    # 2. Через фасад сервиса (то, что увидит контроллер)
    print("\n--- Service facade ---")
    service = MoviesService(client)
    for movie_id in movie_ids:
        response = await service.retrieve_movie_info(movie_id)
        print(response.model_dump_json(by_alias=True))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Fetch MovieInfo records from movies-info-service")
    parser.add_argument("movie_ids", nargs="+", help="MovieInfo ids to fetch")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args()

    configure_logging(args.log_level)
    asyncio.run(main(args.movie_ids))
