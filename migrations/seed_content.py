"""
Seed Script: built-in content to the database
Seeds services, team members and approved sample reviews into empty tables

Usage:
    python migrations/seed_content.py
"""

import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from extensions import db
from models import Service, TeamMember, Review
from utils.content import DEFAULT_SERVICES, DEFAULT_TEAM, SAMPLE_REVIEWS


def seed_services():
    """Seed services when the table is empty"""
    if Service.query.count():
        print("  Services already present, skipping...")
        return 0
    for service_data in DEFAULT_SERVICES:
        db.session.add(Service(
            title=service_data['title'],
            description=service_data['description'],
            category=service_data['category'],
            price_range=service_data.get('price_range')
        ))
    db.session.commit()
    print(f"  [OK] Seeded {len(DEFAULT_SERVICES)} services")
    return len(DEFAULT_SERVICES)


def seed_team():
    """Seed team members when the table is empty"""
    if TeamMember.query.count():
        print("  Team members already present, skipping...")
        return 0
    for member in DEFAULT_TEAM:
        db.session.add(TeamMember(
            name=member['name'],
            role=member['role'],
            bio=member.get('bio'),
            avatar_url=member.get('avatar_url') or None,
            social_links=member.get('social_links', {})
        ))
    db.session.commit()
    print(f"  [OK] Seeded {len(DEFAULT_TEAM)} team members")
    return len(DEFAULT_TEAM)


def seed_reviews():
    """Seed approved sample reviews when the table is empty"""
    if Review.query.count():
        print("  Reviews already present, skipping...")
        return 0
    for review in SAMPLE_REVIEWS:
        db.session.add(Review(
            reviewer_name=review['reviewer_name'],
            project_name=review.get('project_name'),
            content=review['content'],
            rating=review.get('rating'),
            is_approved=True
        ))
    db.session.commit()
    print(f"  [OK] Seeded {len(SAMPLE_REVIEWS)} reviews")
    return len(SAMPLE_REVIEWS)


def seed_all():
    return {
        'services': seed_services(),
        'team_members': seed_team(),
        'reviews': seed_reviews()
    }


def main():
    """Main seed function"""
    print("=" * 60)
    print("Portfolio Content Seed Script")
    print("=" * 60)

    # Create app and context; tables and the owner account are created on startup
    app = create_app()
    with app.app_context():
        seed_all()

    print("\n" + "=" * 60)
    print("Seeding completed successfully!")
    print("=" * 60)


if __name__ == '__main__':
    main()
