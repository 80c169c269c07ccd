"""
Content Module - Built-in portfolio content and form choices
"""

PERSONAL_INFO = {
    'name': 'Sarathi Manikandan',
    'title': 'Software Engineer & UI/UX Designer',
    'email': 'hello@example.com',
    'phone': '+91 98765 43210',
    'location': 'Chennai, India',
    'bio': (
        "I'm a passionate software engineer building modern web applications, "
        "machine learning systems and IoT prototypes. I combine technical "
        "expertise with a keen eye for design to deliver exceptional digital "
        "experiences."
    ),
    'resume_url': '/resume.pdf'
}

PROJECTS = [
    {
        'id': 'portfolio',
        'title': 'Personal Portfolio',
        'description': 'A responsive portfolio with a booking and training intake.',
        'long_description': (
            'This portfolio showcases skills and projects in a clean interface, '
            'with a client dashboard for booked projects, meetings and messages.'
        ),
        'image_url': 'https://images.unsplash.com/photo-1517694712202-14dd9538aa97',
        'tags': ['React', 'Tailwind CSS', 'Flask'],
        'demo_url': '#',
        'github_url': 'https://github.com/SarathiManikandan0/portfolio',
        'featured': True
    },
    {
        'id': 'ecommerce',
        'title': 'E-Commerce Platform',
        'description': 'A full-featured e-commerce solution with payment integration.',
        'long_description': (
            'Product listings, shopping cart, user authentication and payment '
            'processing, plus an admin dashboard for products and orders.'
        ),
        'image_url': 'https://images.unsplash.com/photo-1557821552-17105176677c',
        'tags': ['React', 'Node.js', 'MongoDB', 'Stripe'],
        'demo_url': '#',
        'github_url': 'https://github.com/SarathiManikandan0/ecommerce',
        'featured': True
    },
    {
        'id': 'ai-assistant',
        'title': 'AI Coding Assistant',
        'description': 'An AI-powered tool that helps developers write better code.',
        'long_description': (
            'Suggests code, identifies bugs and helps optimize code, integrating '
            'with popular IDEs.'
        ),
        'image_url': 'https://images.unsplash.com/photo-1555066931-4365d14bab8c',
        'tags': ['Python', 'TensorFlow', 'VS Code Extension'],
        'demo_url': '#',
        'github_url': 'https://github.com/SarathiManikandan0/ai-assistant',
        'featured': False
    },
    {
        'id': 'health-tracker',
        'title': 'Health & Fitness Tracker',
        'description': 'Track workouts, nutrition, and health metrics.',
        'long_description': (
            'Log workouts, track nutrition, monitor vital statistics and set '
            'personalized goals with progress visualizations.'
        ),
        'image_url': 'https://images.unsplash.com/photo-1507925921958-8a62f3d1a50d',
        'tags': ['React Native', 'Firebase', 'Health APIs'],
        'demo_url': '#',
        'github_url': 'https://github.com/SarathiManikandan0/health-tracker',
        'featured': False
    }
]

SKILLS = [
    {'name': 'React', 'icon': 'react', 'level': 5, 'category': 'frontend'},
    {'name': 'JavaScript', 'icon': 'javascript', 'level': 5, 'category': 'frontend'},
    {'name': 'TypeScript', 'icon': 'typescript', 'level': 4, 'category': 'frontend'},
    {'name': 'Tailwind CSS', 'icon': 'tailwind', 'level': 4, 'category': 'frontend'},
    {'name': 'Python', 'icon': 'python', 'level': 5, 'category': 'backend'},
    {'name': 'Node.js', 'icon': 'nodejs', 'level': 4, 'category': 'backend'},
    {'name': 'SQL', 'icon': 'sql', 'level': 3, 'category': 'backend'},
    {'name': 'Git', 'icon': 'git', 'level': 4, 'category': 'other'},
    {'name': 'Figma', 'icon': 'figma', 'level': 3, 'category': 'design'}
]

EXPERIENCES = [
    {
        'title': 'Senior Frontend Developer',
        'company': 'Tech Innovations Inc.',
        'location': 'Bengaluru, India',
        'start_date': 'Jan 2021',
        'end_date': 'Present',
        'description': [
            'Lead development of core products using React and TypeScript',
            'Implemented CI/CD pipelines that reduced deployment time by 40%',
            'Mentored junior developers and conducted code reviews'
        ]
    },
    {
        'title': 'Full Stack Developer',
        'company': 'Digital Solutions Ltd.',
        'location': 'Chennai, India',
        'start_date': 'Mar 2018',
        'end_date': 'Dec 2020',
        'description': [
            'Developed and maintained web applications',
            'Created RESTful APIs and integrated third-party services'
        ]
    }
]

EDUCATION = [
    {
        'degree': 'Master of Science in Computer Science',
        'institution': 'Anna University',
        'location': 'Chennai, India',
        'start_date': '2014',
        'end_date': '2016',
        'description': 'Specialized in Artificial Intelligence and Machine Learning'
    },
    {
        'degree': 'Bachelor of Engineering in Computer Engineering',
        'institution': 'Anna University',
        'location': 'Chennai, India',
        'start_date': '2010',
        'end_date': '2014',
        'description': 'Graduated with honors'
    }
]

SOCIAL_LINKS = [
    {'platform': 'GitHub', 'url': 'https://github.com/SarathiManikandan0'},
    {'platform': 'LinkedIn', 'url': 'https://www.linkedin.com/in/sarathi-manikandan/'},
    {'platform': 'Instagram', 'url': 'https://www.instagram.com/sarathi_manikandan/'}
]

SAMPLE_REVIEWS = [
    {
        'id': 'sample-1',
        'reviewer_name': 'Ravi Kumar',
        'project_name': 'E-commerce Platform',
        'content': (
            'Delivered an exceptional e-commerce solution that exceeded my '
            'expectations. The attention to detail made all the difference.'
        ),
        'rating': 5
    },
    {
        'id': 'sample-2',
        'reviewer_name': 'Priya Sharma',
        'project_name': 'ML-based Recommendation System',
        'content': (
            'The recommendation system built for our platform increased user '
            'engagement by 40%. Highly recommend!'
        ),
        'rating': 5
    },
    {
        'id': 'sample-3',
        'reviewer_name': 'Ajith Menon',
        'project_name': 'IoT Smart Home Project',
        'content': (
            'Helped me with my final year IoT project. Great mentor with real '
            'hardware integration expertise.'
        ),
        'rating': 4
    }
]

DEFAULT_TEAM = [
    {
        'id': 'sarathi',
        'name': 'Sarathi Manikandan',
        'role': 'Founder & Lead Developer',
        'bio': 'Full stack developer working across web, ML and IoT.',
        'avatar_url': '',
        'social_links': {
            'github': 'https://github.com/SarathiManikandan0',
            'linkedin': 'https://www.linkedin.com/in/sarathi-manikandan/',
            'instagram': 'https://www.instagram.com/sarathi_manikandan/'
        }
    }
]

DEFAULT_SERVICES = [
    {
        'title': 'Web Development',
        'description': 'Responsive websites and web applications built end to end.',
        'category': 'software',
        'price_range': '₹15,000 - ₹50,000'
    },
    {
        'title': 'Machine Learning Solutions',
        'description': 'Recommendation, classification and forecasting models for your data.',
        'category': 'software',
        'price_range': '₹30,000+'
    },
    {
        'title': 'IoT & Hardware Projects',
        'description': 'Prototypes and final year projects with sensors and microcontrollers.',
        'category': 'hardware',
        'price_range': '₹5,000 - ₹30,000'
    }
]

PROJECT_TYPES = ['software', 'hardware']

BUDGET_RANGES = [
    '₹5,000 - ₹15,000',
    '₹15,000 - ₹30,000',
    '₹30,000 - ₹50,000',
    '₹50,000+'
]

OTHER_TOPIC = 'Other (please specify)'

TRAINING_TOPICS = [
    'Web Development Basics',
    'Python Programming',
    'Full Stack MERN Development',
    'Data Science & ML Fundamentals',
    'IoT & Hardware Programming',
    'Mobile App Development',
    OTHER_TOPIC
]

AVAILABILITY_OPTIONS = {
    'weekday_morning': 'Weekdays (Morning)',
    'weekday_afternoon': 'Weekdays (Afternoon)',
    'weekday_evening': 'Weekdays (Evening)',
    'weekend_morning': 'Weekends (Morning)',
    'weekend_afternoon': 'Weekends (Afternoon)',
    'weekend_evening': 'Weekends (Evening)'
}


def get_project(project_id):
    """Find a built-in project by id"""
    return next((p for p in PROJECTS if p['id'] == project_id), None)


def github_username_from_links(links=None, default=None):
    """Extract the GitHub handle from the social links"""
    for link in links if links is not None else SOCIAL_LINKS:
        if link.get('platform', '').lower() == 'github':
            handle = link.get('url', '').rstrip('/').split('/')[-1]
            if handle:
                return handle
    return default
