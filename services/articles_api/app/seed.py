from datetime import datetime, timezone
from typing import List

from shared.schemas.article import ArticleCreate, Category

PLACEHOLDER_IMAGE = "/api/placeholder/800/450"


def sample_articles() -> List[ArticleCreate]:
    """Fixed sample set loaded into a fresh store."""
    return [
        ArticleCreate(
            title="Lorem ipsum dolor sit amet, consectetur adipiscing elit",
            content=(
                "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor "
                "incididunt ut labore et dolore magna aliqua. Ut enim ad minim veniam, quis nostrud "
                "exercitation ullamco laboris nisi ut aliquip ex ea commodo consequat. Duis aute irure "
                "dolor in reprehenderit in voluptate velit esse cillum dolore eu fugiat nulla pariatur. "
                "Excepteur sint occaecat cupidatat non proident, sunt in culpa qui officia deserunt "
                "mollit anim id est laborum.\n\nSed ut perspiciatis unde omnis iste natus error sit "
                "voluptatem accusantium doloremque laudantium, totam rem aperiam, eaque ipsa quae ab "
                "illo inventore veritatis et quasi architecto beatae vitae dicta sunt explicabo. Nemo "
                "enim ipsam voluptatem quia voluptas sit aspernatur aut odit aut fugit, sed quia "
                "consequuntur magni dolores eos qui ratione voluptatem sequi nesciunt."
            ),
            excerpt="Lorem ipsum dolor sit amet, consectetur adipiscing",
            category=Category.POLITICS,
            author="John Smith",
            image_url=PLACEHOLDER_IMAGE,
            slug="lorem-ipsum-dolor-sit-amet",
            published_at=datetime(2024, 1, 15, tzinfo=timezone.utc),
        ),
        ArticleCreate(
            title="Reegelteemi irimtio siretien genies",
            content=(
                "Reegelteemi irimtio siretien genies consectetur adipiscing elit, sed do eiusmod "
                "tempor incididunt ut labore et dolore magna aliqua. Ut enim ad minim veniam, quis "
                "nostrud exercitation ullamco laboris nisi ut aliquip ex ea commodo consequat.\n\n"
                "Duis aute irure dolor in reprehenderit in voluptate velit esse cillum dolore eu "
                "fugiat nulla pariatur. Excepteur sint occaecat cupidatat non proident, sunt in culpa "
                "qui officia deserunt mollit anim id est laborum. Sed ut perspiciatis unde omnis iste "
                "natus error sit voluptatem accusantium doloremque laudantium."
            ),
            excerpt="Reegelteemi irimtio siretien genies",
            category=Category.TECH,
            author="Sarah Johnson",
            image_url=PLACEHOLDER_IMAGE,
            slug="reegelteemi-irimtio-siretien-genies",
            published_at=datetime(2024, 1, 14, tzinfo=timezone.utc),
        ),
        ArticleCreate(
            title="Technology advances reshape modern workplace dynamics",
            content=(
                "The rapid evolution of technology continues to transform how we work, communicate, "
                "and collaborate in professional environments across various industries. From "
                "artificial intelligence to remote collaboration tools, the modern workplace is "
                "undergoing unprecedented changes.\n\nCompanies are adapting to new paradigms of "
                "productivity, employee engagement, and operational efficiency. This transformation "
                "affects not only how work gets done but also the fundamental relationship between "
                "employers and employees in the digital age."
            ),
            excerpt="Technology advances reshape modern workplace dynamics",
            category=Category.TECH,
            author="Mike Chen",
            image_url=PLACEHOLDER_IMAGE,
            slug="technology-advances-reshape-workplace",
            published_at=datetime(2024, 1, 13, tzinfo=timezone.utc),
        ),
        ArticleCreate(
            title="Breaking: Major Sports Championship Results Announced",
            content=(
                "In a thrilling conclusion to this year's championship series, teams from across the "
                "nation competed in what many are calling one of the most exciting tournaments in "
                "recent history. The final scores were closer than anticipated, with several matches "
                "going into overtime.\n\nFans gathered in stadiums and watched from home as their "
                "favorite teams battled for supremacy. The athletic performances displayed throughout "
                "the tournament showcase the incredible dedication and skill of today's professional "
                "athletes."
            ),
            excerpt="Major championship results announced after thrilling tournament",
            category=Category.SPORTS,
            author="Alex Rodriguez",
            image_url=PLACEHOLDER_IMAGE,
            slug="major-sports-championship-results",
            published_at=datetime(2024, 1, 12, tzinfo=timezone.utc),
        ),
        ArticleCreate(
            title="Entertainment Industry Embraces New Digital Platforms",
            content=(
                "The entertainment landscape is rapidly evolving as streaming services, social media "
                "platforms, and digital content creators reshape how audiences consume media. "
                "Traditional broadcasters are adapting their strategies to compete in this new "
                "ecosystem.\n\nFrom independent creators gaining massive followings to established "
                "studios launching direct-to-consumer platforms, the industry is witnessing a "
                "fundamental shift in content distribution and audience engagement patterns."
            ),
            excerpt="Entertainment industry adapts to digital platform revolution",
            category=Category.ENTERTAINMENT,
            author="Emma Watson",
            image_url=PLACEHOLDER_IMAGE,
            slug="entertainment-digital-platforms",
            published_at=datetime(2024, 1, 11, tzinfo=timezone.utc),
        ),
    ]
