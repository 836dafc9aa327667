"""
Static content of the public landing page: hero, about, services, testimonials, contact.
"""

HERO = {
    "badge": "Transform Your Body in 90 Days",
    "headline": "Unleash Your Peak Performance",
    "subheading": (
        "Elite fitness coaching designed for high-performers who demand results. "
        "Personalized training, nutrition, and accountability to achieve your goals."
    ),
    "stats": [
        {"value": "500+", "label": "Transformations"},
        {"value": "98%", "label": "Success Rate"},
        {"value": "15+", "label": "Years Experience"},
    ],
}

ABOUT = {
    "mission": (
        "I'm dedicated to helping high-performers achieve their fitness goals through "
        "science-backed training, personalized nutrition, and unwavering accountability."
    ),
    "features": [
        {
            "title": "Certified Excellence",
            "description": "Certified personal trainer with 15+ years of experience transforming lives.",
        },
        {
            "title": "Holistic Approach",
            "description": "Focus on physical fitness, nutrition, mental wellness, and sustainable habits.",
        },
        {
            "title": "Personalized Plans",
            "description": "Every program is tailored to your goals, lifestyle, and fitness level.",
        },
        {
            "title": "Proven Results",
            "description": "500+ successful transformations with a 98% client satisfaction rate.",
        },
    ],
    "story": [
        "With over 15 years of experience in elite fitness coaching, I've helped hundreds of "
        "professionals, entrepreneurs, and athletes transform their bodies and minds. My approach "
        "combines cutting-edge training methodologies with personalized nutrition and mental "
        "performance strategies.",
        "I believe that true transformation goes beyond the gym. It's about building sustainable "
        "habits, developing mental resilience, and creating a lifestyle that supports your highest "
        "ambitions. Whether you're looking to build muscle, lose fat, or optimize performance, "
        "I'll be with you every step of the way.",
    ],
    "certifications": ["NASM Certified", "Sports Nutrition", "Strength Coach"],
}

SERVICES = [
    {
        "title": "1-on-1 Personal Training",
        "description": "Customized workout programs designed specifically for your goals, fitness level, and schedule.",
        "features": [
            "Personalized workout plans",
            "Form correction & technique",
            "Progressive overload strategy",
            "Flexible scheduling",
        ],
        "price": "$199/month",
    },
    {
        "title": "Nutrition Coaching",
        "description": "Science-backed nutrition plans that fuel your performance and support your transformation.",
        "features": ["Custom meal plans", "Macro tracking guidance", "Supplement recommendations", "Weekly check-ins"],
        "price": "$149/month",
    },
    {
        "title": "Mindset Coaching",
        "description": "Develop the mental resilience and habits needed for long-term success and peak performance.",
        "features": ["Goal setting strategies", "Habit formation techniques", "Stress management", "Accountability system"],
        "price": "$129/month",
    },
    {
        "title": "Complete Transformation",
        "description": "All-inclusive coaching program combining training, nutrition, and mindset for maximum results.",
        "features": ["Everything included", "Priority support access", "90-day transformation plan", "Results guaranteed"],
        "price": "$399/month",
        "featured": True,
    },
]

TESTIMONIALS = [
    {
        "name": "Marcus Chen",
        "role": "Tech CEO",
        "image": "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?q=80&w=150&h=150&auto=format&fit=crop",
        "text": "Working with Elite Fitness Coach transformed not just my body, but my entire approach to "
                "health and performance. Down 30 pounds and feeling stronger than ever at 45.",
    },
    {
        "name": "Sarah Mitchell",
        "role": "Entrepreneur",
        "image": "https://images.unsplash.com/photo-1494790108377-be9c29b29330?q=80&w=150&h=150&auto=format&fit=crop",
        "text": "The personalized approach and accountability made all the difference. I finally have a "
                "sustainable fitness routine that fits my busy schedule. Best investment I have made.",
    },
    {
        "name": "David Rodriguez",
        "role": "Investment Banker",
        "image": "https://images.unsplash.com/photo-1500648767791-00dcc994a43e?q=80&w=150&h=150&auto=format&fit=crop",
        "text": "I have tried countless trainers and programs. This is the only one that delivered real, "
                "lasting results. The holistic approach to fitness, nutrition, and mindset is unmatched.",
    },
    {
        "name": "Emily Watson",
        "role": "Marketing Director",
        "image": "https://images.unsplash.com/photo-1438761681033-6461ffad8d80?q=80&w=150&h=150&auto=format&fit=crop",
        "text": "The coaching went beyond just workouts. I learned how to fuel my body properly and "
                "developed habits that stick. Three months in and I feel like a completely different person.",
    },
    {
        "name": "James Park",
        "role": "Software Engineer",
        "image": "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?q=80&w=150&h=150&auto=format&fit=crop",
        "text": "As someone who sits at a desk all day, I was struggling with back pain and low energy. "
                "The customized program addressed my specific needs and the results speak for themselves.",
    },
    {
        "name": "Lisa Anderson",
        "role": "Attorney",
        "image": "https://images.unsplash.com/photo-1487412720507-e7ab37603c6f?q=80&w=150&h=150&auto=format&fit=crop",
        "text": "Elite Fitness Coach understands the demands of high-performance careers. The flexibility "
                "and results-focused approach fit perfectly into my lifestyle. Highly recommend.",
    },
]

CONTACT = {
    "email": "coach@elitefitness.com",
    "phone": "+1 (555) 123-4567",
    "location": "Los Angeles, CA",
    "what_to_expect": [
        "Free 30-minute consultation call",
        "Assessment of your goals and current fitness level",
        "Customized program recommendation",
        "Start your transformation journey",
    ],
}
