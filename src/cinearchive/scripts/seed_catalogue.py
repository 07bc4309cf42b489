"""Seed script to populate a small starter catalogue."""

import asyncio

from sqlalchemy import select

from cinearchive.database import AsyncSessionLocal
from cinearchive.models import Country, Film
from cinearchive.schemas.film import FilmInput
from cinearchive.services.film_editor import create_film, reconcile_names

COUNTRIES = [
    ("United States", "USA"),
    ("France", "FRA"),
    ("South Korea", "KOR"),
    ("Japan", "JPN"),
]

FILMS = [
    {
        "title": "The Godfather",
        "release_date": "1972-03-24",
        "language": "English",
        "runtime": 175,
        "type": "feature",
        "boost": True,
        "description": "The aging patriarch of an organized crime dynasty transfers control of his clandestine empire to his reluctant son.",
        "country": "United States",
        "director_names": ["Francis Ford Coppola"],
        "genre_names": ["Crime", "Drama"],
        "keyword_names": ["mafia", "family"],
    },
    {
        "title": "Parasite",
        "release_date": "2019",
        "language": "Korean",
        "runtime": 132,
        "type": "feature",
        "boost": True,
        "description": "Greed and class discrimination threaten the newly formed symbiotic relationship between the wealthy Park family and the destitute Kim clan.",
        "country": "South Korea",
        "director_names": ["Bong Joon-ho"],
        "genre_names": ["Thriller", "Drama"],
        "keyword_names": ["class differences", "family"],
    },
    {
        "title": "La Haine",
        "release_date": "1995-05-31",
        "language": "French",
        "runtime": 98,
        "type": "feature",
        "description": "24 hours in the lives of three young men in the French suburbs the day after a violent riot.",
        "country": "France",
        "director_names": ["Mathieu Kassovitz"],
        "genre_names": ["Drama"],
        "keyword_names": ["riot", "suburbs"],
    },
    {
        "title": "Spirited Away",
        "release_date": "2001",
        "language": "Japanese",
        "runtime": 125,
        "type": "animation",
        "boost": True,
        "description": "A young girl wanders into a world ruled by gods, witches and spirits.",
        "country": "Japan",
        "director_names": ["Hayao Miyazaki"],
        "genre_names": ["Animation", "Fantasy"],
        "keyword_names": ["spirits", "bathhouse"],
    },
]


async def seed_catalogue() -> None:
    """Seed the database with reference countries and a handful of films."""
    async with AsyncSessionLocal() as session:
        await reconcile_names(session, Country, [name for name, _ in COUNTRIES])
        await session.flush()
        result = await session.execute(select(Country))
        countries = {country.name: country for country in result.scalars().all()}
        for name, code in COUNTRIES:
            countries[name].code = code
        await session.commit()

        for film_data in FILMS:
            film_data = dict(film_data)
            country = countries[film_data.pop("country")]

            # Check if film already exists
            result = await session.execute(select(Film.id).where(Film.title == film_data["title"]))
            if result.scalar_one_or_none():
                print(f"Film {film_data['title']!r} already exists, skipping")
                continue

            film = await create_film(session, FilmInput(**film_data, country_ids=[country.id]))
            print(f"Added film: {film.title}")

        print("Catalogue seeding complete")


if __name__ == "__main__":
    asyncio.run(seed_catalogue())
