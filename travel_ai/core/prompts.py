countries_prompt = (
    "List all countries in the world with their two-letter ISO 3166-1 alpha-2 code, "
    "sorted alphabetically by name."
)

states_prompt = "List all major states/provinces/regions for {country}, sorted alphabetically."

top_cities_prompt = """
List the top 10 most popular tourist cities in {state}, {country}.
For each city, provide its name and country.
"""

detailed_city_prompt = """
Generate detailed travel information for "{city}".
Include the city's name, country.
Also, provide a list of its 6 most famous tourist spots.
For each spot, include a unique ID, name, estimated AQI (Air Quality Index), and an engaging description.
"""

itinerary_prompt = """
Create a vibrant, culturally-rich {days}-day itinerary for {city}, starting {start_date}.
The user's must-visit spots are: {spot_names}.
For each day, create a practical, timed schedule that logically includes the selected spots.
For each evening, suggest a unique, specific local event relevant to the start date.
Return a single JSON object.
"""

guides_prompt = """
You are a travel agency manager. Create a list of 3 diverse, fictional tour guides for hire in {city}.
For each guide, provide:
1. A realistic name.
2. 2-3 specialties (e.g., 'Ancient History', 'Street Food Expert').
3. A short, compelling bio (2-3 sentences).
"""

ride_route_prompt = """
Plan a detailed road trip from {origin} to {destination} by {vehicle_type}.
Provide a SEQUENTIAL list of stops including major cities, towns, and recommended pit stops.
CRITICAL: You must try to find a relevant stop approximately every {stop_interval_km} km. It doesn't have to be exact, but aim for this frequency to ensure frequent breaks.
For each stop, provide:
1. Distance from the previous stop.
2. Expected weather (assume current season).
3. Estimated Air Quality Index (AQI).
4. Key highlights or famous things (e.g., specific food, landmark).
5. Type of stop (city, town, food, fuel, etc.).

Also provide overall distance, duration, road conditions, and safety tips.
"""
