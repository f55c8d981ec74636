"""
Template responses for the chat service.

The production classifier is keyword based: it picks one of a handful of
markdown answers, each carrying one or more fenced code blocks. Keep the
answers as markdown; the client side parser turns the fences into files.
"""

from typing import Callable, List, Tuple

GREETING_RESPONSE = (
    "Hello! I can help you create websites, apps, calculators, todo lists, and more. "
    "What would you like to build?"
)


def generate_website_code(prompt: str) -> str:
    return '''I'll create a modern, responsive website for you!

```html
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Modern Website</title>
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: 'Inter', -apple-system, BlinkMacSystemFont, sans-serif;
            line-height: 1.6;
            color: #333;
        }
        .hero {
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            min-height: 100vh;
            display: flex;
            align-items: center;
            justify-content: center;
            text-align: center;
            color: white;
        }
        .hero-content { max-width: 800px; padding: 0 20px; }
        .hero h1 { font-size: clamp(2.5rem, 5vw, 4rem); margin-bottom: 1rem; }
        .hero p { font-size: clamp(1.1rem, 3vw, 1.5rem); margin-bottom: 2rem; opacity: 0.9; }
        .cta-button {
            background: #ff6b6b;
            color: white;
            padding: 15px 40px;
            border-radius: 50px;
            text-decoration: none;
            display: inline-block;
        }
        .features { padding: 100px 0; background: #f8f9fa; }
        .container { max-width: 1200px; margin: 0 auto; padding: 0 20px; }
        .features-grid {
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(300px, 1fr));
            gap: 40px;
            margin-top: 60px;
        }
        .feature-card {
            background: white;
            padding: 40px;
            border-radius: 20px;
            text-align: center;
            box-shadow: 0 10px 30px rgba(0, 0, 0, 0.1);
        }
        .section-title { text-align: center; font-size: 2.5rem; }
        @media (max-width: 768px) {
            .features-grid { grid-template-columns: 1fr; }
        }
    </style>
</head>
<body>
    <section class="hero">
        <div class="hero-content">
            <h1>Welcome to the Future</h1>
            <p>Experience innovation like never before with our cutting-edge solutions</p>
            <a href="#features" class="cta-button">Explore Features</a>
        </div>
    </section>

    <section class="features" id="features">
        <div class="container">
            <h2 class="section-title">Amazing Features</h2>
            <div class="features-grid">
                <div class="feature-card"><h3>Lightning Fast</h3><p>Optimized for speed and performance</p></div>
                <div class="feature-card"><h3>Beautiful Design</h3><p>Looks great on all devices</p></div>
                <div class="feature-card"><h3>Secure &amp; Reliable</h3><p>Built with security as a priority</p></div>
            </div>
        </div>
    </section>

    <script>
        document.querySelectorAll('a[href^="#"]').forEach(anchor => {
            anchor.addEventListener('click', function (e) {
                e.preventDefault();
                document.querySelector(this.getAttribute('href')).scrollIntoView({ behavior: 'smooth' });
            });
        });
    </script>
</body>
</html>
```

This website includes:
- Modern responsive design
- Smooth scrolling navigation
- Mobile-first layout

Just save as an HTML file and open in your browser!'''


def generate_react_code(prompt: str) -> str:
    return '''I'll create a modern React application for you!

```json
{
  "name": "react-app",
  "version": "1.0.0",
  "type": "module",
  "scripts": {
    "dev": "vite",
    "build": "tsc && vite build",
    "preview": "vite preview"
  },
  "dependencies": {
    "react": "^18.2.0",
    "react-dom": "^18.2.0"
  },
  "devDependencies": {
    "@types/react": "^18.2.0",
    "@types/react-dom": "^18.2.0",
    "@vitejs/plugin-react": "^4.0.0",
    "typescript": "^5.0.0",
    "vite": "^4.4.0"
  }
}
```

```tsx
import React, { useState } from 'react'
import './App.css'

interface Todo {
  id: number
  text: string
  completed: boolean
}

function App() {
  const [todos, setTodos] = useState<Todo[]>([])
  const [input, setInput] = useState('')

  const addTodo = () => {
    if (input.trim()) {
      setTodos([...todos, { id: Date.now(), text: input, completed: false }])
      setInput('')
    }
  }

  const toggleTodo = (id: number) => {
    setTodos(todos.map(todo => todo.id === id ? { ...todo, completed: !todo.completed } : todo))
  }

  const deleteTodo = (id: number) => {
    setTodos(todos.filter(todo => todo.id !== id))
  }

  return (
    <div className="app">
      <h1>Modern Todo App</h1>
      <input
        value={input}
        onChange={(e) => setInput(e.target.value)}
        onKeyDown={(e) => e.key === 'Enter' && addTodo()}
        placeholder="Add a new task..."
      />
      <button onClick={addTodo}>Add Task</button>
      {todos.map(todo => (
        <div key={todo.id} className={todo.completed ? 'todo completed' : 'todo'}>
          <input type="checkbox" checked={todo.completed} onChange={() => toggleTodo(todo.id)} />
          <span>{todo.text}</span>
          <button onClick={() => deleteTodo(todo.id)}>Delete</button>
        </div>
      ))}
      {todos.length === 0 && <p>No tasks yet. Add one above!</p>}
    </div>
  )
}

export default App
```

This React app includes:
- TypeScript for type safety
- Modern React hooks
- Full todo functionality

Run with: `npm install && npm run dev`'''


def generate_python_code(prompt: str) -> str:
    return '''I'll create a comprehensive Python application for you!

```python
#!/usr/bin/env python3
"""
Modern Python Application
"""

import csv
from datetime import datetime
from typing import Dict, List


class DataProcessor:
    """A small data processing class"""

    def __init__(self):
        self.data: List[Dict[str, str]] = []

    def load_from_csv(self, filename: str) -> bool:
        try:
            with open(filename, "r", encoding="utf-8") as file:
                self.data = list(csv.DictReader(file))
        except FileNotFoundError:
            print(f"File {filename} not found")
            return False
        print(f"Loaded {len(self.data)} records from {filename}")
        return True

    def analyze_data(self) -> Dict:
        if not self.data:
            return {}
        return {
            "total_records": len(self.data),
            "timestamp": datetime.now().isoformat(),
            "fields": list(self.data[0].keys()),
        }


def main():
    print("Python Data Processor Started")
    DataProcessor()
    print("Ready to process data!")


if __name__ == "__main__":
    main()
```

This Python application includes:
- Data loading with error handling
- Type hints
- A simple entry point

Run with: `python main.py`'''


def generate_api_code(prompt: str) -> str:
    return '''I'll create a complete REST API server for you!

**server.js**

```javascript
import express from 'express';
import cors from 'cors';

const app = express();
const PORT = process.env.PORT || 5000;

app.use(cors());
app.use(express.json());

let users = [
  { id: 1, name: 'Alice Johnson', email: 'alice@example.com' },
  { id: 2, name: 'Bob Smith', email: 'bob@example.com' }
];

app.get('/api/users', (req, res) => {
  res.json({ data: users });
});

app.get('/api/users/:id', (req, res) => {
  const user = users.find(u => u.id === parseInt(req.params.id));
  if (!user) {
    return res.status(404).json({ error: 'User not found' });
  }
  res.json({ data: user });
});

app.post('/api/users', (req, res) => {
  const { name, email } = req.body;
  if (!name || !email) {
    return res.status(400).json({ error: 'Name and email are required' });
  }
  const newUser = { id: Date.now(), name, email };
  users.push(newUser);
  res.status(201).json({ data: newUser });
});

app.listen(PORT, '0.0.0.0', () => {
  console.log(`Server running on http://0.0.0.0:${PORT}`);
});
```

This REST API includes:
- CRUD operations for users
- Input validation and error handling
- CORS support

Run with: `npm install && npm start`'''


def generate_calculator_code(prompt: str) -> str:
    return '''I'll create a modern calculator for you!

```html
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Calculator</title>
    <style>
        body {
            font-family: Arial, sans-serif;
            display: flex;
            justify-content: center;
            align-items: center;
            min-height: 100vh;
            margin: 0;
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        }
        .calculator { background: white; border-radius: 20px; padding: 20px; }
        .display { width: 100%; height: 60px; font-size: 24px; text-align: right; margin-bottom: 20px; }
        .buttons { display: grid; grid-template-columns: repeat(4, 1fr); gap: 10px; }
        button { height: 50px; font-size: 18px; border: none; border-radius: 10px; cursor: pointer; }
        .operator { background: #667eea; color: white; }
        .equals { background: #28a745; color: white; }
        .clear { background: #dc3545; color: white; }
    </style>
</head>
<body>
    <div class="calculator">
        <input type="text" class="display" id="display" value="0" readonly>
        <div class="buttons">
            <button class="clear" onclick="clearDisplay()">C</button>
            <button class="clear" onclick="deleteLast()">&larr;</button>
            <button class="operator" onclick="appendToDisplay('/')">/</button>
            <button class="operator" onclick="appendToDisplay('*')">&times;</button>
            <button onclick="appendToDisplay('7')">7</button>
            <button onclick="appendToDisplay('8')">8</button>
            <button onclick="appendToDisplay('9')">9</button>
            <button class="operator" onclick="appendToDisplay('-')">-</button>
            <button onclick="appendToDisplay('4')">4</button>
            <button onclick="appendToDisplay('5')">5</button>
            <button onclick="appendToDisplay('6')">6</button>
            <button class="operator" onclick="appendToDisplay('+')">+</button>
            <button onclick="appendToDisplay('1')">1</button>
            <button onclick="appendToDisplay('2')">2</button>
            <button onclick="appendToDisplay('3')">3</button>
            <button class="equals" onclick="calculate()">=</button>
            <button onclick="appendToDisplay('0')" style="grid-column: span 2;">0</button>
            <button onclick="appendToDisplay('.')">.</button>
        </div>
    </div>

    <script>
        const display = document.getElementById('display');
        let currentInput = '0';

        function updateDisplay() { display.value = currentInput; }

        function appendToDisplay(value) {
            currentInput = (currentInput === '0' && value !== '.') ? value : currentInput + value;
            updateDisplay();
        }

        function clearDisplay() { currentInput = '0'; updateDisplay(); }

        function deleteLast() {
            currentInput = currentInput.length > 1 ? currentInput.slice(0, -1) : '0';
            updateDisplay();
        }

        function calculate() {
            try {
                currentInput = Function('"use strict"; return (' + currentInput + ')')().toString();
            } catch (error) {
                currentInput = 'Error';
            }
            updateDisplay();
        }
    </script>
</body>
</html>
```

Just save as an HTML file and open in your browser!'''


TemplateFn = Callable[[str], str]

# Checked in order; the first rule with a matching keyword wins
TEMPLATE_RULES: List[Tuple[Tuple[str, ...], TemplateFn]] = [
    (("website", "landing"), generate_website_code),
    (("react",), generate_react_code),
    (("python",), generate_python_code),
    (("api", "server"), generate_api_code),
    (("calculator",), generate_calculator_code),
]


def generate_response(prompt: str) -> str:
    """Pick the template answer for a prompt; greeting text when nothing matches"""
    lower_prompt = prompt.lower()
    for keywords, template in TEMPLATE_RULES:
        if any(keyword in lower_prompt for keyword in keywords):
            return template(prompt)
    return GREETING_RESPONSE
