"""
Built-in Rule Table - Eliza-style patterns and replies
======================================================

The rule table used when no rule file is configured. Order matters:
earlier rules shadow later ones, so the generic question rule sits
after the greeting and identity rules.
"""

DEFAULT_RULES = [
    {
        "name": "greeting",
        "matcher": r"hello|hi|hey|howdy",
        "replies": [
            "Hello! How are you doing today?",
            "Hi there! What's on your mind?",
            "Hey! How can I help you?",
            "Howdy! What would you like to talk about?",
        ],
    },
    {
        "name": "how_are_you",
        "matcher": r"how are you",
        "replies": [
            "I'm just a program, but I'm functioning well! How are you?",
            "I'm doing great! Thanks for asking. How about you?",
            "I'm here and ready to chat! How are you feeling?",
        ],
    },
    {
        "name": "help",
        "matcher": r"help|what can you do",
        "replies": [
            "I'm a simple chatbot built with Eliza-style pattern matching. "
            "I can respond to your messages based on keywords. Try asking me questions!",
            "I can have a basic conversation with you. Ask me anything and I'll do my best to respond!",
            "I use pattern matching to respond to your messages. Try different phrases and see how I react!",
        ],
    },
    {
        "name": "identity",
        "matcher": r"your name|who are you",
        "replies": [
            "I'm a simple chat assistant, built to demonstrate component-based thinking!",
            "I'm a chatbot created for educational purposes. Nice to meet you!",
            "You can call me ChatBot. I'm here to demonstrate different web component approaches.",
        ],
    },
    {
        "name": "question",
        "matcher": r"\b(why|how|what|when|where|who)\b.*\?",
        "replies": [
            "That's an interesting question. What do you think?",
            "I'm not sure I have a good answer for that. Can you tell me more?",
            "Hmm, that's thought-provoking. What's your perspective on it?",
            "Good question! What led you to ask about that?",
        ],
    },
    {
        "name": "apology",
        "matcher": r"sorry|apologize",
        "replies": [
            "No need to apologize! Everything's fine.",
            "It's okay! No worries at all.",
            "Don't worry about it. We're all good!",
        ],
    },
    {
        "name": "thanks",
        "matcher": r"thank you|thanks",
        "replies": [
            "You're welcome! Happy to help!",
            "No problem at all!",
            "Glad I could help! Is there anything else you'd like to know?",
        ],
    },
    {
        "name": "goodbye",
        "matcher": r"bye|goodbye|see you|farewell",
        "replies": [
            "Goodbye! It was nice chatting with you!",
            "See you later! Have a great day!",
            "Farewell! Come back anytime!",
            "Bye! Take care!",
        ],
    },
    {
        "name": "affirmative",
        "matcher": r"\b(yes|yeah|yep|sure|okay|ok)\b",
        "replies": [
            "Great! What would you like to talk about?",
            "Awesome! Tell me more.",
            "Cool! What's next?",
        ],
    },
    {
        "name": "negative",
        "matcher": r"\b(no|nope|nah)\b",
        "replies": [
            "Okay, no problem! What else is on your mind?",
            "Fair enough. Is there something else you'd like to discuss?",
            "I understand. What would you like to talk about instead?",
        ],
    },
    {
        "name": "i_am",
        "matcher": r"I am (.*)",
        "replies": [
            "How long have you been $1?",
            "Why do you think you are $1?",
            "How does being $1 make you feel?",
        ],
    },
    {
        "name": "i_feel",
        "matcher": r"I feel (.*)",
        "replies": [
            "Why do you feel $1?",
            "How often do you feel $1?",
            "What makes you feel $1?",
        ],
    },
    {
        "name": "i_think",
        "matcher": r"I think (.*)",
        "replies": [
            "What makes you think $1?",
            "Why do you believe $1?",
            "Tell me more about why you think $1.",
        ],
    },
]

DEFAULT_REPLIES = [
    "Tell me more about that.",
    "I see. Can you elaborate?",
    "That's interesting. What else?",
    "Go on, I'm listening.",
    "How does that make you feel?",
    "What do you mean by that?",
    "Can you explain that a bit more?",
]
