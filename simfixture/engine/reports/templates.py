INDEX_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ results.simulation }} - {{ results.run_id }}</title>
  <style>
    body { font-family: sans-serif; margin: 2rem; color: #222; }
    table { border-collapse: collapse; margin-bottom: 2rem; }
    th, td { border: 1px solid #ccc; padding: 0.3rem 0.6rem; text-align: right; }
    th:first-child, td:first-child { text-align: left; }
    .passed { color: #1a7f37; }
    .failed { color: #cf222e; }
  </style>
</head>
<body>
  <h1>{{ results.simulation }}</h1>
  <p>
    Run <code>{{ results.run_id }}</code>: {{ results.header.vus }} virtual users,
    {{ results.global_stats.count }} requests in {{ "%.2f"|format(results.elapsed) }}s.
  </p>

  <h2>Assertions</h2>
  {% if assertion_results %}
  <ul>
    {% for result in assertion_results %}
    <li class="{{ 'passed' if result.passed else 'failed' }}">
      {{ 'PASS' if result.passed else 'FAIL' }}: {{ result.message }}
    </li>
    {% endfor %}
  </ul>
  {% else %}
  <p>No assertions declared.</p>
  {% endif %}

  <h2>Statistics (ms)</h2>
  <table>
    <thead>
      <tr>
        {% for column in columns %}<th>{{ column }}</th>{% endfor %}
      </tr>
    </thead>
    <tbody>
      {% for row in rows %}
      <tr>
        {% for column in columns %}<td>{{ row[column]|stat }}</td>{% endfor %}
      </tr>
      {% endfor %}
    </tbody>
  </table>
</body>
</html>
"""
