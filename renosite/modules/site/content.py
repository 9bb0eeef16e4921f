"""
Static marketing content for the public pages.
"""

import base64

HERO = {
    'title': 'Building Your Vision With Excellence',
    'subtitle': 'Kitchens, bathrooms, additions and whole-home renovations across Bucks County.',
    'cta': 'Get a free estimate',
}


def encode_inquiry(message):
    """Base64 message used by the contact page's `iq` prefill parameter"""
    return base64.b64encode(message.encode('utf-8')).decode('ascii')


def decode_inquiry(value):
    """Inverse of encode_inquiry; anything undecodable gives ''"""
    if not value:
        return ''
    try:
        return base64.b64decode(value, validate=True).decode('utf-8')
    except (ValueError, UnicodeDecodeError):
        return ''


SERVICES = [
    {
        'title': 'Kitchen Remodeling',
        'description': 'Transform your kitchen with custom cabinets, modern appliances, and beautiful countertops.',
    },
    {
        'title': 'Bathroom Renovation',
        'description': 'Complete bathroom makeovers including tiling, fixtures, and luxury upgrades.',
    },
    {
        'title': 'Home Additions',
        'description': 'Expand your living space with custom room additions and home extensions.',
    },
    {
        'title': 'Interior Renovation',
        'description': 'Full interior updates including flooring, painting, and custom built-ins.',
    },
    {
        'title': 'Basement Finishing',
        'description': 'Convert your basement into a functional living space with expert finishing.',
    },
    {
        'title': 'Outdoor Living',
        'description': 'Create beautiful outdoor spaces with decks, patios, and landscaping.',
    },
]

for _service in SERVICES:
    _service['inquiry'] = encode_inquiry(f"I'm interested in {_service['title'].lower()}.")

ABOUT = {
    'title': 'About Us',
    'paragraphs': [
        'We are a family-run renovation contractor serving Southampton and the surrounding area.',
        'Every project is managed end to end by our own crew, from design consultation to final walkthrough.',
    ],
    'stats': [
        {'value': '20+', 'label': 'years of experience'},
        {'value': '500+', 'label': 'projects completed'},
        {'value': '100%', 'label': 'licensed and insured'},
    ],
}

CATEGORIES = [
    {'id': 'all', 'name': 'All Projects'},
    {'id': 'commercial', 'name': 'Commercial'},
    {'id': 'residential', 'name': 'Residential'},
    {'id': 'renovation', 'name': 'Renovation'},
    {'id': 'infrastructure', 'name': 'Infrastructure'},
]

# Shown when the backend has no projects or cannot be reached
SHOWCASE_PROJECTS = [
    {
        'id': 1,
        'title': 'Oakridge Office Complex',
        'category': 'commercial',
        'description': 'A modern, sustainable office complex with LEED certification and innovative workspace design.',
        'image': '/1.jpg',
        'completed': '2023',
        'location': 'Portland, OR',
    },
    {
        'id': 2,
        'title': 'Riverside Luxury Residences',
        'category': 'residential',
        'description': 'Premium waterfront condominiums featuring panoramic views and high-end finishes.',
        'image': '/2.jpg',
        'completed': '2022',
        'location': 'Seattle, WA',
    },
    {
        'id': 3,
        'title': 'Greenway Shopping Center',
        'category': 'commercial',
        'description': 'A modern retail space with eco-friendly design and expansive community areas.',
        'image': '/3.jpg',
        'completed': '2023',
        'location': 'Denver, CO',
    },
    {
        'id': 4,
        'title': 'Historic Downtown Renovation',
        'category': 'renovation',
        'description': 'Careful restoration of a century-old building while preserving its historical character.',
        'image': '/4.jpg',
        'completed': '2021',
        'location': 'Boston, MA',
    },
    {
        'id': 5,
        'title': 'Hillside Custom Home',
        'category': 'residential',
        'description': 'A contemporary home designed to harmonize with its natural surroundings and maximize views.',
        'image': '/5.jpg',
        'completed': '2022',
        'location': 'Aspen, CO',
    },
    {
        'id': 6,
        'title': 'Metro Transit Hub',
        'category': 'infrastructure',
        'description': 'A multi-modal transportation center connecting light rail, bus, and pedestrian pathways.',
        'image': '/6.jpeg',
        'completed': '2023',
        'location': 'Chicago, IL',
    },
]

TESTIMONIALS = [
    {
        'name': '',
        'role': 'Homeowner',
        'quote': 'Tom is a great person! Fair, honest and does good work!',
    },
    {
        'name': 'Michael Townsend',
        'role': 'Property Manager',
        'quote': "We've partnered with TCR on multiple renovation projects, and they consistently deliver "
                 'exceptional quality on time and within budget.',
    },
    {
        'name': 'Sarah Johnson',
        'role': 'Homeowner',
        'quote': 'The renovation of our master bathroom was handled with incredible care. They transformed our '
                 'outdated bathroom into a spa-like retreat.',
    },
    {
        'name': 'David Chen',
        'role': 'Homeowner',
        'quote': 'They turned our unfinished basement into an amazing entertainment space while respecting our budget.',
    },
    {
        'name': 'Emily Rodriguez',
        'role': 'Homeowner',
        'quote': 'Professional, clean, and completed the kitchen ahead of schedule. We could not be happier.',
    },
    {
        'name': 'Robert Williams',
        'role': 'Business Owner',
        'quote': 'The team renovated our dental office with minimal disruption to our practice.',
    },
]

PARTNERS = [
    {'id': 1, 'name': 'Bucks County Home Builders Association'},
    {'id': 2, 'name': 'Southampton Chamber of Commerce'},
    {'id': 3, 'name': 'Pennsylvania Remodelers Association'},
    {'id': 4, 'name': 'Better Business Bureau'},
    {'id': 5, 'name': 'Home Advisor'},
]
