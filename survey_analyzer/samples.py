"""Bundled sample survey for trying the analyzer without a file."""

SAMPLE_QUESTION_LIST = """Q1: How satisfied are you with the product overall?
Q2: Which feature would you most like us to add?
Q3: What do you think of our pricing?"""

SAMPLE_SURVEY_TEXT = """--- Q1: How satisfied are you with the product overall? ---
[User 1] Very satisfied, the interface is beautiful and everything runs smoothly.
[User 2] It's okay, sometimes it lags. Please improve performance.
[User 3] Terrible, I can't even log in and support never answers.
[User 4] Pretty good, but some features are buried too deep to find.
[User 5] Fine, I mostly use it for daily work and it's enough.
[User 6] Extremely disappointed, none of the promised features shipped.
[User 7] Long-time user here, this release is solid and stable.
[User 8] Satisfied, especially with the new report export, it helps a lot.

--- Q2: Which feature would you most like us to add? ---
[User 1] A dark mode, my eyes get tired at night.
[User 2] More keyboard shortcuts to work faster.
[User 3] Fix login first, more features are useless if I can't get in.
[User 4] A customizable home layout so common items come first.
[User 5] Nothing in particular, keeping it stable is enough.
[User 6] When is the promised cloud sync going live?
[User 7] Dark mode +1, and an iPad version please.
[User 8] Open up more permissions in the API.

--- Q3: What do you think of our pricing? ---
[User 1] A bit expensive, a student discount would be nice.
[User 2] Slightly high, but reasonable given the features.
[User 3] Not worth it, the experience is too poor.
[User 4] Moderate, acceptable.
[User 5] My company pays, so I don't mind.
[User 6] Not worth it at all, just a cash grab.
[User 7] For the pro plan the price is actually fair.
[User 8] Great value, much cheaper than competitors.
"""
