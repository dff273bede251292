# studio/services/helpers/site_content.py
# Static content for the public marketing pages.

PORTFOLIO_CATEGORIES = [
    {"id": "all", "label": "All Work"},
    {"id": "web", "label": "Web Development"},
    {"id": "app", "label": "App Development"},
    {"id": "graphic", "label": "Graphic Design"},
    {"id": "ui/ux", "label": "UI/UX Design"},
    {"id": "branding", "label": "Branding"},
]

# Wording used on the detail page ("For <client>, we created a ...")
CATEGORY_DELIVERABLE = {
    "web": "website",
    "app": "mobile application",
    "graphic": "graphic design solution",
    "ui/ux": "user experience design",
    "branding": "brand identity",
}

PORTFOLIO_PROJECTS = [
    {
        "id": "1",
        "title": "E-Commerce Platform Redesign",
        "description": "A complete overhaul of an e-commerce platform with a focus on user experience and conversion optimization.",
        "category": "web",
        "image": "https://images.unsplash.com/photo-1523800503107-5bc3ba2a6f81?q=80&w=2080",
        "link": "https://example.com/project1",
        "technologies": ["Next.js", "Tailwind CSS", "Supabase", "Stripe"],
        "featured": True,
        "year": 2023,
        "client": "Fashion Retailer",
    },
    {
        "id": "2",
        "title": "Health & Fitness Mobile App",
        "description": "A comprehensive fitness tracking application with personalized workout plans and nutrition guidance.",
        "category": "app",
        "image": "https://images.unsplash.com/photo-1512941937669-90a1b58e7e9c?q=80&w=2080",
        "technologies": ["React Native", "Firebase", "HealthKit", "Google Fit API"],
        "featured": True,
        "year": 2023,
        "client": "Wellness Startup",
    },
    {
        "id": "3",
        "title": "Corporate Brand Identity",
        "description": "A complete brand identity design including logo, color palette, typography, and brand guidelines.",
        "category": "branding",
        "image": "https://images.unsplash.com/photo-1600508774634-4e11d34730e2?q=80&w=2080",
        "technologies": ["Adobe Illustrator", "Adobe Photoshop", "Brand Strategy"],
        "featured": False,
        "year": 2022,
        "client": "Financial Services Firm",
    },
    {
        "id": "4",
        "title": "Interactive Data Visualization Dashboard",
        "description": "A real-time dashboard for visualizing complex data sets with interactive filtering and exploration capabilities.",
        "category": "web",
        "image": "https://images.unsplash.com/photo-1551288049-bebda4e38f71?q=80&w=2080",
        "technologies": ["D3.js", "React", "Node.js", "MongoDB"],
        "featured": True,
        "year": 2023,
        "client": "Data Analytics Company",
    },
    {
        "id": "5",
        "title": "Product Packaging Design",
        "description": "Eye-catching packaging design for a premium product line with a focus on sustainability and brand recognition.",
        "category": "graphic",
        "image": "https://images.unsplash.com/photo-1636622433525-127afdf3662d?q=80&w=2080",
        "technologies": ["Adobe Illustrator", "Adobe Photoshop", "Packaging Design", "3D Modeling"],
        "featured": False,
        "year": 2022,
        "client": "Organic Food Brand",
    },
    {
        "id": "6",
        "title": "Real Estate Listing Platform",
        "description": "A modern platform for real estate listings with advanced search, virtual tours, and agent connectivity.",
        "category": "web",
        "image": "https://images.unsplash.com/photo-1560518883-ce09059eeffa?q=80&w=2080",
        "technologies": ["Next.js", "MongoDB", "Google Maps API", "AWS"],
        "featured": False,
        "year": 2022,
        "client": "Real Estate Agency",
    },
    {
        "id": "7",
        "title": "Educational Mobile Game",
        "description": "An engaging mobile game designed to teach programming concepts to children through interactive puzzles.",
        "category": "app",
        "image": "https://images.unsplash.com/photo-1626240130051-68871c71e8a5?q=80&w=2080",
        "technologies": ["Unity", "C#", "iOS", "Android"],
        "featured": True,
        "year": 2023,
        "client": "EdTech Startup",
    },
    {
        "id": "8",
        "title": "Annual Report Design",
        "description": "A visually compelling annual report that effectively communicates company performance and future vision.",
        "category": "graphic",
        "image": "https://images.unsplash.com/photo-1586281380349-632531db7ed4?q=80&w=2080",
        "technologies": ["Adobe InDesign", "Adobe Illustrator", "Data Visualization"],
        "featured": False,
        "year": 2022,
        "client": "Technology Corporation",
    },
    {
        "id": "9",
        "title": "Banking App Redesign",
        "description": "A user-centered redesign of a banking application focused on simplifying complex financial tasks.",
        "category": "ui/ux",
        "image": "https://images.unsplash.com/photo-1563986768609-322da13575f3?q=80&w=2080",
        "technologies": ["Figma", "Prototyping", "User Testing", "Design Systems"],
        "featured": True,
        "year": 2023,
        "client": "National Bank",
    },
    {
        "id": "10",
        "title": "Restaurant Ordering System",
        "description": "An integrated ordering system for restaurants with table management, kitchen display, and payment processing.",
        "category": "web",
        "image": "https://images.unsplash.com/photo-1555396273-367ea4eb4db5?q=80&w=2080",
        "technologies": ["React", "Node.js", "PostgreSQL", "Stripe"],
        "featured": False,
        "year": 2022,
        "client": "Restaurant Chain",
    },
    {
        "id": "11",
        "title": "Travel Companion App",
        "description": "A comprehensive travel app with itinerary planning, local recommendations, and offline maps.",
        "category": "app",
        "image": "https://images.unsplash.com/photo-1469854523086-cc02fe5d8800?q=80&w=2080",
        "technologies": ["React Native", "GraphQL", "MongoDB", "Google Maps API"],
        "featured": False,
        "year": 2022,
        "client": "Travel Tech Company",
    },
    {
        "id": "12",
        "title": "Event Poster Series",
        "description": "A series of distinctive event posters designed to capture attention and convey the essence of each event.",
        "category": "graphic",
        "image": "https://images.unsplash.com/photo-1508900436185-54e5c3f02e77?q=80&w=2080",
        "technologies": ["Adobe Photoshop", "Adobe Illustrator", "Typography"],
        "featured": False,
        "year": 2022,
        "client": "Arts Festival",
    },
]

SERVICES = [
    {"title": "Web Development", "description": "Custom websites and web applications built with modern technologies and frameworks."},
    {"title": "App Development", "description": "Native and cross-platform mobile applications for iOS and Android devices."},
    {"title": "UI/UX Design", "description": "User-centered design solutions that enhance user experience and drive engagement."},
    {"title": "Video Editing", "description": "Professional video editing and motion graphics for various digital platforms."},
    {"title": "Digital Marketing", "description": "Strategic digital marketing solutions to grow your online presence and reach."},
    {"title": "E-Commerce Solutions", "description": "End-to-end e-commerce development with secure payment integration and inventory management."},
    {"title": "Branding & Identity", "description": "Comprehensive branding solutions that communicate your unique value proposition."},
    {"title": "Global Web Presence", "description": "Multilingual websites and localization services to reach international audiences."},
]

PROCESS_STEPS = ["Discovery & Strategy", "Design & Development", "Testing & Refinement", "Launch & Support"]

FEATURES = [
    {"title": "Clean Code", "description": "Built with modern best practices and clean architecture principles for maintainable code."},
    {"title": "Beautiful Design", "description": "Carefully crafted interfaces that blend aesthetics with functional user experience."},
    {"title": "Fast Performance", "description": "Optimized for speed and efficiency, ensuring smooth user interactions."},
    {"title": "Secure & Reliable", "description": "Built with security in mind, protecting your data and users at every step."},
]

STATS = [
    {"value": "250+", "label": "Projects Completed"},
    {"value": "50+", "label": "Happy Clients"},
    {"value": "10+", "label": "Years Experience"},
    {"value": "15+", "label": "Industry Awards"},
]

TESTIMONIALS = [
    {"quote": "Incredible service! The website they designed for my business is modern, fast, and user-friendly. It has truly helped us attract more customers online.",
     "author": "Rahul Sharma", "role": "Founder at Digital Solutions"},
    {"quote": "The mobile app they developed for us is seamless and performs exceptionally well. Their team understood our requirements perfectly and delivered beyond our expectations.",
     "author": "Priya Mehta", "role": "CEO at FitWell"},
    {"quote": "Their graphic design work is simply outstanding! From our logo to social media creatives, everything was designed with perfection and creativity.",
     "author": "Amit Verma", "role": "Marketing Head at Creative Minds"},
    {"quote": "The video editing team did an amazing job! They turned our raw footage into a high-quality promotional video that helped boost our brand engagement.",
     "author": "Neha Kapoor", "role": "Content Strategist at Visionary Media"},
    {"quote": "I wanted a complete branding package, and they delivered it flawlessly! The website, app, and graphics all aligned perfectly with our brand vision.",
     "author": "Ananya Iyer", "role": "Co-Founder at Trendy Creations"},
]

FAQS = [
    {"question": "What services do you offer?",
     "answer": "We offer a comprehensive range of creative services including web design and development, mobile app development, branding and identity design, UI/UX design, e-commerce solutions, digital marketing, and custom software development."},
    {"question": "How much does a typical project cost?",
     "answer": "Project costs vary depending on scope, complexity, and specific requirements. After our initial consultation, we'll provide a detailed proposal outlining all costs. Our projects typically range from $5,000 for smaller engagements to $50,000+ for comprehensive solutions."},
    {"question": "What is your typical project timeline?",
     "answer": "A simple website might take 4-6 weeks, while a complex web application could take 3-6 months. During our consultation, we'll provide a detailed timeline with key milestones."},
    {"question": "Do you offer ongoing maintenance and support?",
     "answer": "Yes, we offer maintenance and support packages covering regular updates, security monitoring, performance optimization and technical support."},
    {"question": "How do you handle revisions and feedback?",
     "answer": "Our project methodology includes dedicated review phases where you can provide feedback. We typically include 2-3 rounds of revisions in our project quotes."},
    {"question": "Do you work with clients remotely?",
     "answer": "Yes, we work with clients globally and have established effective remote collaboration processes."},
    {"question": "What information do you need to start a project?",
     "answer": "We need to understand your business goals, target audience, project requirements, timeline, and budget. Any existing brand guidelines, content, or design preferences are also helpful."},
    {"question": "Do you offer rush services for urgent projects?",
     "answer": "Yes, we can accommodate rush projects depending on our current workload. Rush services may incur additional fees for the expedited timeline."},
]


def list_portfolio(category=None):
    """Portfolio entries, optionally narrowed to one category ('all' keeps everything)."""
    if not category or category == 'all':
        return list(PORTFOLIO_PROJECTS)
    return [p for p in PORTFOLIO_PROJECTS if p["category"] == category]


def get_portfolio_item(item_id):
    return next((p for p in PORTFOLIO_PROJECTS if p["id"] == str(item_id)), None)


def category_label(category_id):
    return next((c["label"] for c in PORTFOLIO_CATEGORIES if c["id"] == category_id), category_id)
