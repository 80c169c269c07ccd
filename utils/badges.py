"""
Badges Module - Project status badges and social platform icons
Handles status labels, colors, and icon lookups with explicit defaults
"""

import enum


STATUS_BADGES = {
    'pending': {
        'label': 'Pending',
        'color': 'bg-yellow-500',
        'text_color': '#f59e0b'
    },
    'in_progress': {
        'label': 'In Progress',
        'color': 'bg-blue-500',
        'text_color': '#3b82f6'
    },
    'completed': {
        'label': 'Completed',
        'color': 'bg-green-500',
        'text_color': '#10b981'
    },
    'unknown': {
        'label': 'Unknown',
        'color': 'bg-gray-500',
        'text_color': '#6b7280'
    }
}

PROJECT_STATUSES = ('pending', 'in_progress', 'completed')


class SocialPlatform(enum.Enum):
    GITHUB = 'github'
    LINKEDIN = 'linkedin'
    TWITTER = 'twitter'
    INSTAGRAM = 'instagram'
    OTHER = 'other'

    @classmethod
    def from_name(cls, name):
        """Map a platform name (any case) to a variant; unknown names are OTHER"""
        key = (name or '').strip().lower()
        for member in cls:
            if member.value == key:
                return member
        return cls.OTHER


PLATFORM_ICONS = {
    SocialPlatform.GITHUB: 'github',
    SocialPlatform.LINKEDIN: 'linkedin',
    SocialPlatform.TWITTER: 'twitter',
    SocialPlatform.INSTAGRAM: 'instagram',
    SocialPlatform.OTHER: 'link',
}


def get_status_badge(status):
    """
    Get badge information for a project status

    Args:
        status (str): Project status (pending, in_progress, completed)

    Returns:
        dict: Badge information, the 'unknown' badge for anything else
    """
    key = (status or '').strip().lower()
    badge = STATUS_BADGES.get(key, STATUS_BADGES['unknown'])
    return dict(badge, status=key if key in STATUS_BADGES else 'unknown')


def get_platform_icon(platform_name):
    return PLATFORM_ICONS[SocialPlatform.from_name(platform_name)]


def with_icons(links):
    """Attach an icon name to every social link"""
    return [dict(link, icon=get_platform_icon(link.get('platform'))) for link in links]


__all__ = [
    'STATUS_BADGES',
    'PROJECT_STATUSES',
    'SocialPlatform',
    'PLATFORM_ICONS',
    'get_status_badge',
    'get_platform_icon',
    'with_icons'
]
