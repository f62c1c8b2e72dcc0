TRAINING_STEPS = [
    {
        "id": "foundations",
        "title": "AI Foundations",
        "videos": [
            {
                "id": "intro-to-llms",
                "title": "Intro to Large Language Models",
                "channel": "Anthropic",
                "url": "https://www.youtube.com/watch?v=zjkBMFhNj_g",
                "level": "Beginner",
                "duration": "59:48",
                "questions": [
                    {
                        "id": "q1",
                        "prompt": "What does a language model predict during pre-training?",
                        "choices": [
                            "The next token in a sequence",
                            "The sentiment of a paragraph",
                            "The author of a document",
                            "The language of a web page",
                        ],
                        "answer": 0,
                        "explanation": "Pre-training is next-token prediction over a large corpus.",
                    },
                    {
                        "id": "q2",
                        "prompt": "What is a context window?",
                        "choices": [
                            "A browser pop-up",
                            "The amount of text the model can attend to at once",
                            "The training schedule",
                            "A GPU memory setting",
                        ],
                        "answer": 1,
                        "explanation": "The context window bounds how much input the model sees.",
                    },
                    {
                        "id": "q3",
                        "prompt": "Why can models produce confident but wrong answers?",
                        "choices": [
                            "They always search the web",
                            "They are trained on a single book",
                            "They generate plausible text rather than looking facts up",
                            "They run out of memory",
                        ],
                        "answer": 2,
                        "explanation": "Fluent generation is not the same as verified retrieval.",
                    },
                ],
            },
            {
                "id": "prompting-basics",
                "title": "Prompt Engineering Basics",
                "channel": "Anthropic",
                "url": "https://www.youtube.com/watch?v=T9aRN5JkmL8",
                "level": "Beginner",
                "duration": "24:12",
                "questions": [
                    {
                        "id": "q1",
                        "prompt": "Which habit usually improves a prompt the most?",
                        "choices": [
                            "Writing in capital letters",
                            "Being specific about the task and the expected output",
                            "Keeping it under ten words",
                            "Adding random examples",
                        ],
                        "answer": 1,
                        "explanation": "Clear instructions and output format reduce ambiguity.",
                    },
                    {
                        "id": "q2",
                        "prompt": "What are few-shot examples for?",
                        "choices": [
                            "Showing the model the pattern you expect",
                            "Reducing the price of a request",
                            "Training a new model",
                            "Encrypting the prompt",
                        ],
                        "answer": 0,
                        "explanation": "Examples demonstrate the desired input/output mapping.",
                    },
                ],
            },
        ],
    },
    {
        "id": "working-safely",
        "title": "Working Safely with AI",
        "videos": [
            {
                "id": "data-handling",
                "title": "Handling Company Data with AI Tools",
                "channel": "Claude",
                "url": "https://www.youtube.com/watch?v=Q3kA2sdLxGk",
                "level": "Regular",
                "duration": "12:30",
                "questions": [
                    {
                        "id": "q1",
                        "prompt": "Which data should never be pasted into an unapproved tool?",
                        "choices": [
                            "Public marketing copy",
                            "Customer personal data",
                            "A published blog post",
                            "Open source code",
                        ],
                        "answer": 1,
                        "explanation": "Personal data is covered by the data handling policy.",
                    },
                    {
                        "id": "q2",
                        "prompt": "Who is responsible for checking AI-generated output?",
                        "choices": [
                            "Nobody",
                            "The model vendor",
                            "The person who uses it",
                            "IT support",
                        ],
                        "answer": 2,
                        "explanation": "The author of the work stays accountable for it.",
                    },
                    {
                        "id": "q3",
                        "prompt": "What should you do when output looks wrong?",
                        "choices": [
                            "Verify it against a trusted source",
                            "Ship it anyway",
                            "Ask the model to be more confident",
                            "Delete the conversation",
                        ],
                        "answer": 0,
                        "explanation": "Verification is part of the review step.",
                    },
                ],
            },
            {
                "id": "policy-walkthrough",
                "title": "AI Usage Policy Walkthrough",
                "channel": "Claude",
                "url": "https://www.youtube.com/watch?v=8pTEmbeENF4",
                "level": "Beginner",
                "duration": "08:05",
            },
        ],
    },
]
