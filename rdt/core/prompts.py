query_parse_prompt = """Parse the following Reddit search query into structured parameters. Return only valid JSON.

Query: "{query}"

Return JSON with these fields:
- query: the main search terms (required), without filler words such as "posts about" or "what are"
- subreddit: specific subreddit if mentioned (optional, without the r/ prefix)
- sort: one of "relevance", "hot", "new", "top", "comments" (default: "relevance")
- time_range: one of "hour", "day", "week", "month", "year", "all" (default: "all")
- limit: number of results 1-100 (default: 25)

Leave out any field the query does not mention.

Example input: "what are the best rust tutorials from this week"
Example output: {{"query": "rust tutorials", "sort": "top", "time_range": "week"}}

Example input: "what are people saying about the new zelda in r/NintendoSwitch"
Example output: {{"query": "new zelda", "subreddit": "nintendoswitch"}}

Now parse the query and return only the JSON:"""
