"""
Fallback inference tables used when a document names no features or no
tech stack.

Edit the tables to change what gets suggested; matching is keyword based.
Feature keywords match at the start of a word ("auth" finds
"authentication"), tech keywords match whole words only.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from ..models.nodes import TechCategory, TechStackNodeData

MAX_INFERRED_FEATURES = 8


@dataclass(frozen=True)
class FeatureTemplate:
    keywords: tuple[str, ...]
    feature: str


@dataclass(frozen=True)
class TechTemplate:
    keywords: tuple[str, ...]
    tool_name: str
    category: TechCategory
    notes: str


FEATURE_TEMPLATES: tuple[FeatureTemplate, ...] = (
    FeatureTemplate(('auth', 'login', 'signup', 'register', 'sign up', 'sign in'), 'User Authentication'),
    FeatureTemplate(('dashboard', 'overview', 'home'), 'Dashboard'),
    FeatureTemplate(('profile', 'account', 'settings'), 'User Profile'),
    FeatureTemplate(('search', 'find', 'filter'), 'Search & Filter'),
    FeatureTemplate(('notification', 'alert', 'email'), 'Notifications'),
    FeatureTemplate(('payment', 'billing', 'subscription', 'checkout'), 'Payment Integration'),
    FeatureTemplate(('report', 'analytics', 'insights'), 'Reporting & Analytics'),
    FeatureTemplate(('chat', 'message', 'messaging'), 'Messaging System'),
    FeatureTemplate(('upload', 'file', 'image'), 'File Upload'),
    FeatureTemplate(('admin', 'manage', 'management'), 'Admin Panel'),
)

GENERIC_FEATURES: tuple[str, ...] = (
    'User Authentication & Authorization',
    'Dashboard / Home Screen',
    'Data Management & CRUD Operations',
    'User Profile & Settings',
)

_F = TechCategory.FRONTEND
_B = TechCategory.BACKEND
_D = TechCategory.DATABASE
_A = TechCategory.AUTH
_H = TechCategory.HOSTING
_O = TechCategory.OTHER

TECH_TEMPLATES: tuple[TechTemplate, ...] = (
    # Frontend frameworks
    TechTemplate(('react', 'react.js', 'reactjs'), 'React', _F, 'UI framework'),
    TechTemplate(('next.js', 'nextjs'), 'Next.js', _F, 'React framework with SSR'),
    TechTemplate(('vue', 'vue.js', 'vuejs'), 'Vue.js', _F, 'Progressive UI framework'),
    TechTemplate(('angular',), 'Angular', _F, 'TypeScript framework'),
    TechTemplate(('svelte', 'sveltekit'), 'Svelte', _F, 'Compiled UI framework'),
    # CSS and styling
    TechTemplate(('tailwind', 'tailwindcss'), 'Tailwind CSS', _F, 'Utility-first CSS'),
    TechTemplate(('bootstrap',), 'Bootstrap', _F, 'CSS framework'),
    TechTemplate(('sass', 'scss'), 'Sass', _F, 'CSS preprocessor'),
    TechTemplate(('typescript',), 'TypeScript', _F, 'Type-safe JavaScript'),
    # Backend runtimes and frameworks
    TechTemplate(('node.js', 'nodejs'), 'Node.js', _B, 'JavaScript runtime'),
    TechTemplate(('express', 'expressjs'), 'Express', _B, 'Node.js web framework'),
    TechTemplate(('fastify',), 'Fastify', _B, 'Fast Node.js framework'),
    TechTemplate(('nestjs',), 'NestJS', _B, 'TypeScript framework'),
    TechTemplate(('django',), 'Django', _B, 'Python web framework'),
    TechTemplate(('flask',), 'Flask', _B, 'Python micro-framework'),
    TechTemplate(('fastapi',), 'FastAPI', _B, 'Modern Python API framework'),
    # Databases
    TechTemplate(('postgres', 'postgresql'), 'PostgreSQL', _D, 'Relational database'),
    TechTemplate(('mysql',), 'MySQL', _D, 'Popular SQL database'),
    TechTemplate(('sqlite',), 'SQLite', _D, 'Lightweight SQL database'),
    TechTemplate(('mongodb', 'mongo'), 'MongoDB', _D, 'Document database'),
    TechTemplate(('redis',), 'Redis', _D, 'In-memory data store'),
    TechTemplate(('supabase',), 'Supabase', _D, 'Open-source Firebase alternative'),
    TechTemplate(('firebase',), 'Firebase', _D, 'Google BaaS platform'),
    TechTemplate(('appwrite',), 'Appwrite', _D, 'Open-source BaaS'),
    # Authentication services
    TechTemplate(('auth0',), 'Auth0', _A, 'Authentication & authorization'),
    TechTemplate(('clerk',), 'Clerk', _A, 'User management platform'),
    TechTemplate(('next-auth', 'nextauth'), 'NextAuth.js', _A, 'Next.js authentication'),
    # Hosting and deployment
    TechTemplate(('vercel',), 'Vercel', _H, 'Frontend deployment platform'),
    TechTemplate(('netlify',), 'Netlify', _H, 'Jamstack deployment'),
    TechTemplate(('aws', 'amazon web services'), 'AWS', _H, 'Cloud infrastructure'),
    TechTemplate(('heroku',), 'Heroku', _H, 'PaaS platform'),
    TechTemplate(('railway',), 'Railway', _H, 'Infrastructure platform'),
    TechTemplate(('fly.io',), 'Fly.io', _H, 'Global app platform'),
    # Other services
    TechTemplate(('stripe',), 'Stripe', _O, 'Payment processing'),
    TechTemplate(('sendgrid',), 'SendGrid', _O, 'Email delivery service'),
    TechTemplate(('twilio',), 'Twilio', _O, 'Communication APIs'),
)


@lru_cache(maxsize=256)
def _keyword_pattern(keyword: str, whole_word: bool) -> re.Pattern[str]:
    tail = r'(?![a-z0-9])' if whole_word else ''
    return re.compile(rf'(?<![a-z0-9]){re.escape(keyword)}{tail}')


def _mentions(text: str, keywords: tuple[str, ...], whole_word: bool) -> bool:
    return any(_keyword_pattern(kw, whole_word).search(text) for kw in keywords)


def infer_features(description: str, core_problem: str = '', target_user: str = '') -> list[str]:
    """
    Suggest features from keywords in the idea fields.

    Falls back to a generic four-feature set when nothing matches.
    """
    text = f'{description} {core_problem} {target_user}'.lower()
    features = [t.feature for t in FEATURE_TEMPLATES if _mentions(text, t.keywords, whole_word=False)]
    if not features:
        features = list(GENERIC_FEATURES)
    return features[:MAX_INFERRED_FEATURES]


def infer_tech_stack(text: str, description: str = '') -> list[TechStackNodeData]:
    """Technologies whose keywords appear in the document, in table order."""
    combined = f'{text} {description}'.lower()
    return [
        TechStackNodeData(category=t.category, tool_name=t.tool_name, notes=t.notes)
        for t in TECH_TEMPLATES
        if _mentions(combined, t.keywords, whole_word=True)
    ]


def lookup_tech(name: str) -> TechTemplate | None:
    """The template whose keyword or tool name equals ``name`` (case-insensitive)."""
    key = name.strip().lower()
    for template in TECH_TEMPLATES:
        if key == template.tool_name.lower() or key in template.keywords:
            return template
    return None
